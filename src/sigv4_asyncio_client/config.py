"""Credentials and region from the AWS shared config files or the environment."""

import configparser
import os
import pathlib
from dataclasses import dataclass

from .models import Credentials

DEFAULT_REGION = "us-east-1"


@dataclass(frozen=True)
class AWSProfile:
    credentials: Credentials
    region: str
    endpoint_url: str | None = None


def default_region() -> str:
    return os.environ.get("AWS_DEFAULT_REGION") or DEFAULT_REGION


def load_aws_profile(
    profile_name: str = "default",
    config_path: str | pathlib.Path | None = None,
    credentials_path: str | pathlib.Path | None = None,
) -> AWSProfile:
    if config_path is None:
        config_path = pathlib.Path.home() / ".aws" / "config"
    else:
        config_path = pathlib.Path(config_path)

    if credentials_path is not None:
        credentials_path = pathlib.Path(credentials_path)

    config = configparser.ConfigParser()
    credentials = configparser.ConfigParser()

    # Config file may or may not exist
    config_data = {}
    if config_path.exists():
        config.read(config_path)
        # AWS config uses "profile <name>" except for default
        config_section = (
            profile_name if profile_name == "default" else f"profile {profile_name}"
        )
        if config_section in config:
            config_data = dict(config[config_section])

    credentials_data = {}
    if credentials_path and credentials_path.exists():
        credentials.read(credentials_path)
        if profile_name in credentials:
            credentials_data = dict(credentials[profile_name])

    def lookup(name: str) -> str | None:
        # credentials file takes precedence over config
        return credentials_data.get(name) or config_data.get(name)

    access_key = lookup("aws_access_key_id")
    secret_key = lookup("aws_secret_access_key")

    if not access_key:
        raise ValueError(
            f"aws_access_key_id not found for profile '{profile_name}' "
            f"in config or credentials files"
        )
    if not secret_key:
        raise ValueError(
            f"aws_secret_access_key not found for profile '{profile_name}' "
            f"in config or credentials files"
        )

    return AWSProfile(
        credentials=Credentials(access_key, secret_key, lookup("aws_session_token")),
        region=lookup("region") or default_region(),
        endpoint_url=lookup("endpoint_url"),
    )


def load_env_profile() -> AWSProfile:
    return AWSProfile(
        credentials=Credentials.from_env(),
        region=default_region(),
        endpoint_url=os.environ.get("AWS_ENDPOINT_URL") or None,
    )
