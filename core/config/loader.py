"""
설정 로더

settings.yaml 로드 및 애플리케이션 설정 생성
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from core.constants import PROJECT_ROOT, Defaults, Paths
from core.types import BalanceMode, LedgerAction, RunMode


@dataclass(frozen=True)
class AuthConfig:
    """권한 설정

    enforce_roles가 False이면 모든 호출 허용 (게이트웨이에 위임).
    """

    enforce_roles: bool = False
    policy: dict[str, frozenset[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    mode: RunMode
    db_path: Path
    balance_mode: BalanceMode = BalanceMode.ATOMIC
    number_attempts: int = Defaults.NUMBER_ATTEMPTS
    web_host: str = Defaults.WEB_HOST
    web_port: int = Defaults.WEB_PORT
    accounts_url: str = Defaults.ACCOUNTS_URL
    accounts_timeout_sec: float = Defaults.ACCOUNTS_TIMEOUT_SEC
    auth: AuthConfig = field(default_factory=AuthConfig)


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def get_default_db_path(mode: RunMode) -> Path:
    """모드에 따른 기본 DB 경로 반환

    Args:
        mode: 실행 모드

    Returns:
        DB 파일 경로 (Path 타입)
    """
    if mode == RunMode.PRODUCTION:
        return Paths.PROD_DB
    return Paths.DEV_DB


def _parse_auth(data: dict[str, Any]) -> AuthConfig:
    """auth 섹션 파싱"""
    enforce = bool(data.get("enforce_roles", False))
    raw_policy = data.get("policy") or {}

    if not isinstance(raw_policy, dict):
        raise SettingsLoadError("auth.policy는 {작업: [역할]} 형식이어야 합니다")

    valid_actions = {a.value for a in LedgerAction}
    policy: dict[str, frozenset[str]] = {}
    for action, roles in raw_policy.items():
        if action not in valid_actions:
            raise SettingsLoadError(
                f"auth.policy에 알 수 없는 작업이 있습니다: '{action}'. "
                f"유효한 값: {sorted(valid_actions)}"
            )
        if isinstance(roles, str):
            roles = [roles]
        policy[action] = frozenset(str(r) for r in roles or [])

    return AuthConfig(enforce_roles=enforce, policy=policy)


def load_config(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스

    Raises:
        SettingsLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 유효하지 않은 mode / balance_mode인 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        raise SettingsLoadError(f"settings.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SettingsLoadError("settings.yaml이 비어 있습니다")

    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    # mode 검증
    mode_str = data.get("mode")
    if mode_str is None:
        raise SettingsLoadError("settings.yaml에 'mode' 필드가 없습니다")

    try:
        mode = RunMode(mode_str)
    except ValueError as e:
        valid_modes = [m.value for m in RunMode]
        raise ValueError(
            f"유효하지 않은 mode입니다: '{mode_str}'. "
            f"유효한 값: {valid_modes}"
        ) from e

    # DB 경로 (상대 경로는 프로젝트 루트 기준)
    db_config = data.get("database") or {}
    db_path_str = db_config.get("path")
    if db_path_str:
        db_path = Path(db_path_str)
        if not db_path.is_absolute():
            db_path = PROJECT_ROOT / db_path
    else:
        db_path = get_default_db_path(mode)

    # 잔고 변경 방식
    ledger_config = data.get("ledger") or {}
    balance_mode_str = ledger_config.get("balance_mode", BalanceMode.ATOMIC.value)
    try:
        balance_mode = BalanceMode(balance_mode_str)
    except ValueError as e:
        valid_modes = [m.value for m in BalanceMode]
        raise ValueError(
            f"유효하지 않은 balance_mode입니다: '{balance_mode_str}'. "
            f"유효한 값: {valid_modes}"
        ) from e

    accounts_config = data.get("accounts") or {}
    number_attempts = int(accounts_config.get("number_attempts", Defaults.NUMBER_ATTEMPTS))
    if number_attempts < 1:
        raise SettingsLoadError("accounts.number_attempts는 1 이상이어야 합니다")

    web_config = data.get("web") or {}
    payments_config = data.get("payments") or {}

    return AppConfig(
        mode=mode,
        db_path=db_path,
        balance_mode=balance_mode,
        number_attempts=number_attempts,
        web_host=web_config.get("host", Defaults.WEB_HOST),
        web_port=int(web_config.get("port", Defaults.WEB_PORT)),
        accounts_url=payments_config.get("accounts_url", Defaults.ACCOUNTS_URL),
        accounts_timeout_sec=float(
            payments_config.get("timeout_sec", Defaults.ACCOUNTS_TIMEOUT_SEC)
        ),
        auth=_parse_auth(data.get("auth") or {}),
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            type(self)._config = load_config(settings_path)

    @property
    def config(self) -> AppConfig:
        """로드된 전체 설정"""
        assert self._config is not None
        return self._config

    @property
    def mode(self) -> RunMode:
        """현재 실행 모드"""
        return self.config.mode

    @property
    def db_path(self) -> Path:
        """DB 경로"""
        return self.config.db_path

    @property
    def balance_mode(self) -> BalanceMode:
        """잔고 변경 방식 (naive/atomic)"""
        return self.config.balance_mode

    @property
    def number_attempts(self) -> int:
        """계좌번호 생성 시도 횟수"""
        return self.config.number_attempts

    @property
    def auth(self) -> AuthConfig:
        """권한 설정"""
        return self.config.auth

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
