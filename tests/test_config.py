import pytest

from app import config


def test_env_flag(monkeypatch):
    monkeypatch.setenv('CONCURRENT_UPDATES', 'off')
    assert config.env_flag('CONCURRENT_UPDATES', default=True) is False
    monkeypatch.setenv('CONCURRENT_UPDATES', 'Yes')
    assert config.env_flag('CONCURRENT_UPDATES') is True
    monkeypatch.setenv('CONCURRENT_UPDATES', 'maybe')
    assert config.env_flag('CONCURRENT_UPDATES', default=True) is True
    monkeypatch.delenv('CONCURRENT_UPDATES')
    assert config.env_flag('CONCURRENT_UPDATES') is False


def test_env_float(monkeypatch):
    monkeypatch.delenv('GC_PERIOD', raising=False)
    assert config.env_float('GC_PERIOD', default=3.0) == 3.0
    monkeypatch.setenv('GC_PERIOD', '0.5')
    assert config.env_float('GC_PERIOD', default=3.0) == 0.5
    monkeypatch.setenv('GC_PERIOD', 'soon')
    with pytest.raises(RuntimeError):
        config.env_float('GC_PERIOD', default=3.0)
    monkeypatch.setenv('GC_PERIOD', '0')
    with pytest.raises(RuntimeError):
        config.env_float('GC_PERIOD', default=3.0)


@pytest.mark.parametrize(
    'raw, expected',
    [
        ('https://example.com', 'https://example.com'),
        ('https://example.com/', 'https://example.com'),
        ('https://example.com/webhook', 'https://example.com'),
        ('https://example.com/webhook/', 'https://example.com'),
    ],
)
def test_normalize_webhook_base(raw, expected):
    assert config.normalize_webhook_base(raw) == expected


def test_load_settings_defaults(monkeypatch):
    for name in ('WEBHOOK_URL', 'PROXY_URL', 'SESSION_LIFETIME', 'GC_PERIOD',
                 'CONCURRENT_UPDATES', 'NOVELTY_COMMANDS'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('BOT_TOKEN', '123:abc')

    settings = config.load_settings()

    assert settings.bot_token == '123:abc'
    assert settings.webhook_url is None
    assert settings.proxy_url is None
    assert settings.session_lifetime == 3600
    assert settings.gc_period == 3
    assert settings.concurrent_updates is True
    assert settings.novelty_commands is True


def test_load_settings_requires_token_and_webhook(monkeypatch):
    monkeypatch.delenv('BOT_TOKEN', raising=False)
    with pytest.raises(RuntimeError):
        config.load_settings()

    monkeypatch.setenv('BOT_TOKEN', '123:abc')
    monkeypatch.delenv('WEBHOOK_URL', raising=False)
    with pytest.raises(RuntimeError):
        config.load_settings(require_webhook=True)

    monkeypatch.setenv('WEBHOOK_URL', 'https://example.com/webhook')
    monkeypatch.setenv('SESSION_LIFETIME', '60')
    settings = config.load_settings(require_webhook=True)
    assert settings.webhook_url == 'https://example.com'
    assert settings.session_lifetime == 60
