import pytest

from config import load_db_config
from models.db_config import DatabaseConfig, TlsConfig

BASE_ENV = {
    "DB_HOST": "db.internal",
    "DB_NAME": "app",
    "DB_USER": "u",
    "DB_PASS": "secret",
}


def test_reads_connection_settings():
    config = load_db_config({**BASE_ENV, "DB_PORT": "6543"})

    assert config == DatabaseConfig(
        host="db.internal", port=6543, database="app", user="u", password="secret"
    )


@pytest.mark.parametrize("port_env", [{}, {"DB_PORT": ""}])
def test_port_defaults_to_5432(port_env):
    assert load_db_config({**BASE_ENV, **port_env}).port == 5432


def test_non_numeric_port_raises():
    with pytest.raises(ValueError):
        load_db_config({"DB_PORT": "postgres"})


def test_missing_values_pass_through_as_none():
    config = load_db_config({})

    assert config.host is None
    assert config.database is None
    assert config.user is None
    assert config.password is None
    assert config.tls is None


@pytest.mark.parametrize("ssl_value", [None, "false", "TRUE", "1", "yes"])
def test_tls_off_unless_exactly_true(ssl_value):
    env = dict(BASE_ENV)
    if ssl_value is not None:
        env["DB_SSL"] = ssl_value

    config = load_db_config(env)

    assert config.tls is None
    assert config.connect_kwargs()["sslmode"] == "disable"


def test_tls_without_verification():
    config = load_db_config({**BASE_ENV, "DB_SSL": "true", "DB_SSL_REJECT_UNAUTHORIZED": "false"})

    assert config.tls == TlsConfig(verify=False)
    assert config.connect_kwargs()["sslmode"] == "require"
    assert "sslrootcert" not in config.connect_kwargs()


@pytest.mark.parametrize("reject_value", [None, "true", "False", "0", ""])
def test_tls_verifies_unless_rejection_is_exactly_false(reject_value):
    env = {**BASE_ENV, "DB_SSL": "true"}
    if reject_value is not None:
        env["DB_SSL_REJECT_UNAUTHORIZED"] = reject_value

    config = load_db_config(env)

    assert config.tls == TlsConfig(verify=True)
    assert config.connect_kwargs()["sslmode"] == "verify-full"
    assert config.connect_kwargs()["sslrootcert"] == "system"


def test_reads_process_environment_by_default(monkeypatch):
    monkeypatch.setenv("DB_HOST", "from-env")
    monkeypatch.setenv("DB_PORT", "5433")

    config = load_db_config()

    assert config.host == "from-env"
    assert config.port == 5433
