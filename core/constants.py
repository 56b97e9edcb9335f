"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

SERVICE_NAME: str = "accounts"
SERVICE_VERSION: str = "1.0.0"


class Defaults:
    """기본값 상수"""

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 4004

    # 계좌번호 생성 재시도 횟수 (1이면 재시도 없음)
    NUMBER_ATTEMPTS: int = 3

    # 결제 서비스 → 계좌 서비스 출금 호출
    ACCOUNTS_URL: str = "http://localhost:4004"
    ACCOUNTS_TIMEOUT_SEC: float = 4.0

    DEPOSIT_DESCRIPTION: str = "Depósito"
    WITHDRAW_DESCRIPTION: str = "Retiro"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # DB 파일
    PROD_DB: Path = DATA_DIR / "accounts_prod.db"
    DEV_DB: Path = DATA_DIR / "accounts_dev.db"


class AccountNumberRange:
    """계좌번호 범위 (10자리 숫자)"""

    MIN: int = 1_000_000_000
    MAX: int = 9_999_999_999
