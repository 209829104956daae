"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from sparebank1_ynab.core.config import Config, Environment
from sparebank1_ynab.core.json_utils import write_json
from tests.fixtures.synthetic_data import default_account_mapping

CONFIG_ENV_VARS = [
    "SPAREBANK1_CLIENT_ID",
    "SPAREBANK1_CLIENT_SECRET",
    "SPAREBANK1_FIN_INST",
    "YNAB_ACCESS_TOKEN",
    "YNAB_BUDGET_ID",
    "ACCOUNT_CONFIG_PATH",
    "REFRESH_TOKEN_FILE_PATH",
    "INITIAL_REFRESH_TOKEN",
    "DRY_RUN",
    "DEBUG",
    "LOG_LEVEL",
    "SYNC_ENV",
    "SPAREBANK1_TIMEOUT",
    "YNAB_TIMEOUT",
]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Run every test without real credentials or a stray .env file."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def accounts_file(temp_dir) -> Path:
    """accounts.json with the synthetic checking/savings mapping."""
    path = temp_dir / "accounts.json"
    write_json(path, default_account_mapping())
    return path


@pytest.fixture
def test_config(temp_dir, accounts_file) -> Config:
    """Valid configuration pointing at temp files."""
    return Config.with_values(
        sparebank1_client_id="test_client_id",
        sparebank1_client_secret="test_client_secret",
        sparebank1_fin_inst="fid-test",
        ynab_access_token="test_ynab_token",
        ynab_budget_id="test-budget-id",
        account_config_path=accounts_file,
        refresh_token_file_path=temp_dir / "refresh_token.txt",
        initial_refresh_token="initial-refresh-token",
        environment=Environment.TEST,
    )
