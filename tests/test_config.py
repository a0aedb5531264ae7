import pytest

from src.config import DEFAULT_NOTIFICATION_EMAIL, DEFAULT_UPLOAD_FOLDER, AppConfig
from src.exceptions import ConfigurationError


def test_empty_environment_uses_defaults():
    config = AppConfig.from_env({})

    assert config.notification_email == DEFAULT_NOTIFICATION_EMAIL == "alex@pearhaus.com"
    assert config.upload_folder == DEFAULT_UPLOAD_FOLDER
    assert config.cloudinary is None
    assert config.sendgrid is None
    assert config.slack is None
    assert config.upload_max_workers == 4
    assert config.http_timeout_seconds == 30.0


def test_full_environment():
    config = AppConfig.from_env(
        {
            "CLOUDINARY_CLOUD_NAME": "demo",
            "CLOUDINARY_API_KEY": "key",
            "CLOUDINARY_API_SECRET": "secret",
            "CLOUDINARY_FOLDER": "reviews",
            "SENDGRID_API_KEY": "SG.x",
            "NOTIFICATION_EMAIL": "curator@example.com",
            "SLACK_BOT_TOKEN": "xoxb-1",
            "SLACK_NOTIFY_CHANNEL": "C123",
            "UPLOAD_MAX_WORKERS": "8",
            "HTTP_TIMEOUT_SECONDS": "12.5",
        }
    )

    assert config.cloudinary.cloud_name == "demo"
    assert config.upload_folder == "reviews"
    assert config.sendgrid.api_key == "SG.x"
    assert config.notification_email == "curator@example.com"
    assert config.slack.channel == "C123"
    assert config.upload_max_workers == 8
    assert config.http_timeout_seconds == 12.5


def test_blank_values_count_as_unset():
    config = AppConfig.from_env({"SENDGRID_API_KEY": "   ", "NOTIFICATION_EMAIL": ""})
    assert config.sendgrid is None
    assert config.notification_email == DEFAULT_NOTIFICATION_EMAIL


def test_partial_cloudinary_credentials_rejected():
    with pytest.raises(ConfigurationError, match="CLOUDINARY_API_SECRET"):
        AppConfig.from_env({"CLOUDINARY_CLOUD_NAME": "demo", "CLOUDINARY_API_KEY": "key"})


def test_slack_channel_without_token_rejected():
    with pytest.raises(ConfigurationError):
        AppConfig.from_env({"SLACK_NOTIFY_CHANNEL": "C123"})


@pytest.mark.parametrize(
    "env",
    [
        {"UPLOAD_MAX_WORKERS": "0"},
        {"UPLOAD_MAX_WORKERS": "four"},
        {"HTTP_TIMEOUT_SECONDS": "-1"},
        {"NOTIFICATION_EMAIL": "not-an-address"},
    ],
)
def test_invalid_values_rejected(env):
    with pytest.raises(ConfigurationError):
        AppConfig.from_env(env)


def test_log_summary_never_logs_secrets(caplog):
    config = AppConfig.from_env({"SENDGRID_API_KEY": "SG.super-secret"})
    with caplog.at_level("INFO", logger="src.config"):
        config.log_summary()
    assert "sendgrid" in caplog.text
    assert "super-secret" not in caplog.text
