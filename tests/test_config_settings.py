from routerscope.config import Settings


def test_layerswap_key_legacy_alias(monkeypatch):
    """API key should load from legacy aliases when present."""

    monkeypatch.setenv("LAYERSWAP_API_KEY", "")
    monkeypatch.setenv("LS_API_KEY", "alias-from-legacy")
    monkeypatch.delenv("LAYERSWAP_KEY", raising=False)

    settings = Settings()

    assert settings.layerswap_api_key == "alias-from-legacy"
    assert settings.has_layerswap_key()


def test_layerswap_key_direct_env(monkeypatch):
    """Environment-provided API key remains the primary source."""

    monkeypatch.setenv("LAYERSWAP_API_KEY", "primary-key")
    monkeypatch.setenv("LS_API_KEY", "alias-from-legacy")

    settings = Settings()

    assert settings.layerswap_api_key == "primary-key"


def test_defaults(monkeypatch):
    for name in ("DEFAULT_NETWORK_ID", "MAX_PARAMETER_CONCURRENCY", "TOKEN_REGISTRY_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.default_network_id == "1"
    assert settings.max_parameter_concurrency == 8
    assert settings.token_registry_timeout_seconds == 15
