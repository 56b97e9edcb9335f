"""
core/config/loader.py 테스트

settings.yaml 로드, 검증, 권한 정책 파싱 테스트
"""

from pathlib import Path

import pytest

from core.config.loader import (
    AppConfig,
    AuthConfig,
    Settings,
    SettingsLoadError,
    get_default_db_path,
    get_settings,
    load_config,
)
from core.constants import PROJECT_ROOT, Defaults, Paths
from core.types import BalanceMode, RunMode


class TestAppConfig:
    """AppConfig 데이터클래스 테스트"""

    def test_defaults(self) -> None:
        """기본값"""
        config = AppConfig(mode=RunMode.DEVELOPMENT, db_path=Paths.DEV_DB)

        assert config.balance_mode == BalanceMode.ATOMIC
        assert config.number_attempts == Defaults.NUMBER_ATTEMPTS
        assert config.web_port == Defaults.WEB_PORT
        assert config.auth.enforce_roles is False
        assert config.auth.policy == {}

    def test_frozen(self) -> None:
        """불변성 확인"""
        config = AppConfig(mode=RunMode.DEVELOPMENT, db_path=Paths.DEV_DB)

        with pytest.raises(AttributeError):
            config.web_port = 9999  # type: ignore


class TestGetDefaultDbPath:
    """get_default_db_path 함수 테스트"""

    def test_production(self) -> None:
        assert get_default_db_path(RunMode.PRODUCTION) == Paths.PROD_DB

    def test_development(self) -> None:
        assert get_default_db_path(RunMode.DEVELOPMENT) == Paths.DEV_DB


class TestLoadConfig:
    """load_config 함수 테스트"""

    def test_load_full(self, temp_settings_file: Path, temp_dir: Path) -> None:
        """전체 설정 로드"""
        config = load_config(temp_settings_file)

        assert config.mode == RunMode.DEVELOPMENT
        assert config.db_path == temp_dir / "accounts_test.db"
        assert config.balance_mode == BalanceMode.ATOMIC
        assert config.number_attempts == 5
        assert config.web_host == "0.0.0.0"
        assert config.web_port == 5005
        assert config.accounts_url == "http://accounts.test:4004/"
        assert config.accounts_timeout_sec == 2.5

    def test_load_minimal_production(self, temp_settings_file_production: Path) -> None:
        """mode만 있는 설정 → 기본값"""
        config = load_config(temp_settings_file_production)

        assert config.mode == RunMode.PRODUCTION
        assert config.db_path == Paths.PROD_DB
        assert config.balance_mode == BalanceMode.ATOMIC
        assert config.accounts_url == Defaults.ACCOUNTS_URL
        assert config.accounts_timeout_sec == Defaults.ACCOUNTS_TIMEOUT_SEC

    def test_relative_db_path(self, temp_dir: Path) -> None:
        """상대 DB 경로는 프로젝트 루트 기준"""
        file = temp_dir / "rel.yaml"
        file.write_text("mode: development\ndatabase:\n  path: data/x.db\n", encoding="utf-8")

        config = load_config(file)

        assert config.db_path == PROJECT_ROOT / "data" / "x.db"

    def test_naive_balance_mode(self, temp_dir: Path) -> None:
        """naive 방식 선택"""
        file = temp_dir / "naive.yaml"
        file.write_text("mode: development\nledger:\n  balance_mode: naive\n", encoding="utf-8")

        config = load_config(file)

        assert config.balance_mode == BalanceMode.NAIVE

    def test_file_not_found(self, temp_dir: Path) -> None:
        """파일 없음"""
        with pytest.raises(SettingsLoadError, match="찾을 수 없습니다"):
            load_config(temp_dir / "nonexistent.yaml")

    def test_invalid_mode(self, temp_settings_file_invalid_mode: Path) -> None:
        """유효하지 않은 mode"""
        with pytest.raises(ValueError, match="유효하지 않은 mode"):
            load_config(temp_settings_file_invalid_mode)

    def test_invalid_balance_mode(self, temp_dir: Path) -> None:
        """유효하지 않은 balance_mode"""
        file = temp_dir / "bad_ledger.yaml"
        file.write_text("mode: development\nledger:\n  balance_mode: optimistic\n", encoding="utf-8")

        with pytest.raises(ValueError, match="유효하지 않은 balance_mode"):
            load_config(file)

    def test_empty_file(self, temp_dir: Path) -> None:
        """빈 파일"""
        file = temp_dir / "empty.yaml"
        file.write_text("", encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="비어 있습니다"):
            load_config(file)

    def test_not_mapping(self, temp_dir: Path) -> None:
        """최상위가 매핑이 아님"""
        file = temp_dir / "list.yaml"
        file.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="매핑"):
            load_config(file)

    def test_missing_mode(self, temp_dir: Path) -> None:
        """mode 필드 누락"""
        file = temp_dir / "no_mode.yaml"
        file.write_text("web:\n  port: 4004\n", encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="'mode' 필드가 없습니다"):
            load_config(file)

    def test_invalid_number_attempts(self, temp_dir: Path) -> None:
        """number_attempts < 1"""
        file = temp_dir / "attempts.yaml"
        file.write_text("mode: development\naccounts:\n  number_attempts: 0\n", encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="number_attempts"):
            load_config(file)

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        """잘못된 YAML 형식"""
        file = temp_dir / "invalid.yaml"
        file.write_text("invalid: yaml: content:", encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="파싱 실패"):
            load_config(file)


class TestAuthPolicy:
    """auth 섹션 파싱 테스트"""

    def test_policy(self, temp_dir: Path) -> None:
        """작업별 역할 목록"""
        file = temp_dir / "auth.yaml"
        file.write_text(
            """mode: development
auth:
  enforce_roles: true
  policy:
    update: [admin]
    withdraw: cajero
""",
            encoding="utf-8",
        )

        config = load_config(file)

        assert config.auth == AuthConfig(
            enforce_roles=True,
            policy={
                "update": frozenset({"admin"}),
                "withdraw": frozenset({"cajero"}),
            },
        )

    def test_unknown_action(self, temp_dir: Path) -> None:
        """알 수 없는 작업 이름"""
        file = temp_dir / "auth_bad.yaml"
        file.write_text(
            "mode: development\nauth:\n  policy:\n    transfer: [admin]\n",
            encoding="utf-8",
        )

        with pytest.raises(SettingsLoadError, match="알 수 없는 작업"):
            load_config(file)

    def test_policy_not_mapping(self, temp_dir: Path) -> None:
        """policy가 매핑이 아님"""
        file = temp_dir / "auth_list.yaml"
        file.write_text(
            "mode: development\nauth:\n  policy: [admin]\n",
            encoding="utf-8",
        )

        with pytest.raises(SettingsLoadError):
            load_config(file)


class TestSettings:
    """Settings 클래스 테스트"""

    def test_creation(self, temp_settings_file: Path) -> None:
        """기본 생성"""
        settings = Settings(temp_settings_file)

        assert settings.mode == RunMode.DEVELOPMENT
        assert settings.balance_mode == BalanceMode.ATOMIC
        assert settings.number_attempts == 5

    def test_singleton(self, temp_settings_file: Path) -> None:
        """싱글턴 확인"""
        settings1 = Settings(temp_settings_file)
        settings2 = Settings()  # 경로 없이 호출

        assert settings1 is settings2

    def test_properties(self, temp_settings_file: Path) -> None:
        """프로퍼티 확인"""
        settings = Settings(temp_settings_file)

        assert isinstance(settings.config, AppConfig)
        assert isinstance(settings.db_path, Path)
        assert isinstance(settings.auth, AuthConfig)

    def test_reset(self, temp_settings_file: Path) -> None:
        """reset 후 재생성"""
        settings1 = Settings(temp_settings_file)
        Settings.reset()
        settings2 = Settings(temp_settings_file)

        assert settings1 is not settings2


class TestGetSettings:
    """get_settings 함수 테스트"""

    def test_singleton_via_function(self, temp_settings_file: Path) -> None:
        """함수를 통한 싱글턴 확인"""
        settings1 = get_settings(temp_settings_file)
        settings2 = get_settings()

        assert settings1 is settings2
        assert settings1.mode == RunMode.DEVELOPMENT
