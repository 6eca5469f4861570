"""Configuration loading and saving.

Config file location: ~/.config/tweet-segments/config.toml

Schema:
    [render]
    format = "text"       # text | markdown | json | csv
    extended = true       # honour display_text_range
    link_base = "https://x.com"

    [profile_image]
    size = "normal"       # mini | normal | bigger | 400x400 | orig

    [http]
    timeout = 30.0
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path

import tomli_w

CONFIG_DIR = Path.home() / ".config" / "tweet-segments"
CONFIG_FILE = CONFIG_DIR / "config.toml"

OUTPUT_FORMATS = ("text", "markdown", "json", "csv")


@dataclass
class AppConfig:
    output_format: str = "text"
    extended: bool = True
    link_base: str = "https://x.com"
    profile_image_size: str = "normal"
    http_timeout: float = 30.0


def load_config(config_path: Path = CONFIG_FILE) -> AppConfig:
    """Load and validate config from TOML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    render_data = data.get("render", {})
    image_data = data.get("profile_image", {})
    http_data = data.get("http", {})

    output_format = render_data.get("format", "text")
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(
            f"Config render.format must be one of {', '.join(OUTPUT_FORMATS)}, "
            f"got {output_format!r}"
        )

    timeout = float(http_data.get("timeout", 30.0))
    if timeout <= 0:
        raise ValueError("Config http.timeout must be positive")

    return AppConfig(
        output_format=output_format,
        extended=bool(render_data.get("extended", True)),
        link_base=render_data.get("link_base", "https://x.com").rstrip("/"),
        profile_image_size=image_data.get("size", "normal"),
        http_timeout=timeout,
    )


def load_config_or_default(config_path: Path = CONFIG_FILE) -> AppConfig:
    """Load config, falling back to defaults when no file exists."""
    if not config_exists(config_path):
        return AppConfig()
    return load_config(config_path)


def save_config(config: AppConfig, config_path: Path = CONFIG_FILE) -> None:
    """Write config to TOML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "render": {
            "format": config.output_format,
            "extended": config.extended,
            "link_base": config.link_base,
        },
        "profile_image": {
            "size": config.profile_image_size,
        },
        "http": {
            "timeout": config.http_timeout,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)


def config_exists(config_path: Path = CONFIG_FILE) -> bool:
    """Check if config file exists."""
    return config_path.exists()
