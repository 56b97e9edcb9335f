"""
pytest 공통 fixture 정의

설정 파일 / 임시 DB / 계좌 생성 헬퍼
"""

import tempfile
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import Settings
from core.ledger.lifecycle import AccountLifecycleHandler
from core.ledger.models import Account


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_settings():
    """Settings 싱글턴 초기화 (테스트 간 격리)"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성 (development)"""
    content = f"""# 테스트용 settings.yaml
mode: development

database:
  path: {(temp_dir / "accounts_test.db").as_posix()}

ledger:
  balance_mode: atomic

accounts:
  number_attempts: 5

web:
  host: 0.0.0.0
  port: 5005

payments:
  accounts_url: http://accounts.test:4004/
  timeout_sec: 2.5
"""
    path = temp_dir / "settings.yaml"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def temp_settings_file_production(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성 (production, 최소 설정)"""
    path = temp_dir / "settings_prod.yaml"
    path.write_text("mode: production\n", encoding="utf-8")
    return path


@pytest.fixture
def temp_settings_file_invalid_mode(temp_dir: Path) -> Path:
    """잘못된 모드의 settings.yaml 파일 생성"""
    path = temp_dir / "settings_invalid.yaml"
    path.write_text("mode: staging\n", encoding="utf-8")
    return path


@pytest_asyncio.fixture
async def db(tmp_path: Path) -> AsyncGenerator[SQLiteAdapter, None]:
    """스키마가 초기화된 임시 DB"""
    adapter = SQLiteAdapter(tmp_path / "ledger.db")
    await adapter.connect()
    await init_schema(adapter)
    yield adapter
    await adapter.close()


@pytest_asyncio.fixture
async def account(db: SQLiteAdapter) -> Account:
    """잔고 0, ACTIVA 계좌"""
    handler = AccountLifecycleHandler(db)
    return await handler.create("c1", "AHORRO", "BOB", "Principal")
