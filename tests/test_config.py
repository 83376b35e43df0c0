import pytest

from yookassa_payments import ClientConfig, ClientParameters, ConfigError, create_payment_client, load_client_config
from yookassa_payments.core.config import DEFAULT_API_URL
from yookassa_payments.core.environment import build_environment, load_env_file


def test_defaults_without_credentials_load_lazily():
    config = load_client_config(env_file=None, base={})

    assert config.api_url == DEFAULT_API_URL
    assert config.shop_id is None
    assert config.timeout_seconds is None
    with pytest.raises(ConfigError, match="YOOKASSA_SHOP_ID and YOOKASSA_SECRET_KEY"):
        config.credentials()


def test_env_file_fills_gaps_but_environment_wins(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# settings\n"
        "export YOOKASSA_SHOP_ID=from-file\n"
        "YOOKASSA_SECRET_KEY='file-secret'\n"
        "YOOKASSA_API_URL=https://api.example.com/v3/\n"
        "not a setting\n",
        encoding="utf-8",
    )

    config = load_client_config(env_file=str(env_file), base={"YOOKASSA_SHOP_ID": "from-env"})

    assert config.shop_id == "from-env"
    assert config.secret_key == "file-secret"
    assert config.api_url == "https://api.example.com/v3"
    assert config.url_for("/payments") == "https://api.example.com/v3/payments"


def test_keywords_beat_overrides_and_parameters():
    config = load_client_config(
        env_file=None,
        base={"YOOKASSA_SHOP_ID": "env"},
        overrides={"YOOKASSA_SHOP_ID": "override", "YOOKASSA_SECRET_KEY": "s"},
        parameters=ClientParameters(shop_id="param", timeout_seconds=3),
        shop_id="keyword",
    )

    assert config.shop_id == "keyword"
    assert config.secret_key == "s"
    assert config.timeout_seconds == 3.0
    assert config.credentials() == ("keyword", "s")


@pytest.mark.parametrize("raw", ["soon", "0", "-2"])
def test_invalid_timeout_is_rejected(raw):
    with pytest.raises(ConfigError):
        load_client_config(env_file=None, base={"YOOKASSA_TIMEOUT_SECONDS": raw})


def test_repr_hides_secret():
    config = ClientConfig(shop_id="1", secret_key="very-secret")
    assert "very-secret" not in repr(config)


def test_load_env_file_keeps_existing_values(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("A=file\nB=\"quoted\"\n", encoding="utf-8")
    environ = {"A": "existing"}

    merged = load_env_file(str(env_file), environ=environ)

    assert merged == {"A": "existing", "B": "quoted"}


def test_missing_env_file_is_ignored(tmp_path):
    environment = build_environment(env_file=str(tmp_path / "absent"), base={"X": "1"})
    assert environment.get("X") == "1"
    assert environment.get("Y", "fallback") == "fallback"


def test_create_payment_client_refuses_mixed_configuration():
    with pytest.raises(ValueError):
        create_payment_client(config=ClientConfig(), shop_id="1")
