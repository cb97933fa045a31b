from billsplit.config import Settings, get_settings


def test_settings_defaults(monkeypatch):
    for name in ("BILLSPLIT_BASE_FEE_CENTS", "BILLSPLIT_AI_CENTS", "BILLSPLIT_RAW_DECIMALS", "BILLSPLIT_LOCALE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)
    assert settings.base_fee_cents == 0
    assert settings.ai_cents == 0
    assert settings.raw_decimals == 6
    assert settings.locale == "pt_BR"
    assert settings.currency == "BRL"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("BILLSPLIT_BASE_FEE_CENTS", "250")
    monkeypatch.setenv("BILLSPLIT_LOCALE", "en_US")
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.base_fee_cents == 250
        assert settings.locale == "en_US"
    finally:
        get_settings.cache_clear()
