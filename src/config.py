import copy
import json
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Tuple

from dotenv import load_dotenv

from src.logger import get_logger

logger = get_logger(__name__)

# Get base directory (project root)
BASE_DIR = Path(__file__).parent.parent
CONFIG_DIR = BASE_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.json"
ENV_FILE = BASE_DIR / ".env"

load_dotenv(ENV_FILE)

# Flag button -> target language code (DeepL code space).
# Insertion order is the order buttons are offered in.
# India/Korea/Japan use the language codes HI/KO/JA rather than the country
# codes IN/KR/JP. KO and JA reach DeepL; HI is not a DeepL target and goes
# straight to the fallback tiers.
FLAG_TO_LANG: Dict[str, str] = {
    '🇺🇸': 'EN-US',  # English (US)
    '🇪🇸': 'ES',     # Spanish
    '🇫🇷': 'FR',     # French
    '🇵🇹': 'PT-PT',  # Portuguese (Portugal)
    '🇮🇳': 'HI',     # Hindi
    '🇰🇷': 'KO',     # Korean
    '🇯🇵': 'JA',     # Japanese
    '🇵🇱': 'PL',     # Polish
    '🇹🇼': 'ZH-TW',  # Chinese (Traditional), always handled by the fallback tiers
}

# Target codes DeepL accepts. ZH-TW is left out so Traditional Chinese goes
# to LibreTranslate/Google, which can express it through the base code.
DEEPL_SUPPORTED_TARGETS: FrozenSet[str] = frozenset({
    'BG', 'CS', 'DA', 'DE', 'EL', 'EN', 'EN-GB', 'EN-US', 'ES', 'ET', 'FI', 'FR', 'HU',
    'ID', 'IT', 'JA', 'KO', 'LT', 'LV', 'NB', 'NL', 'PL', 'PT', 'PT-PT', 'PT-BR', 'RO',
    'RU', 'SK', 'SL', 'SV', 'TR', 'UK', 'ZH',
})

DEFAULT_LIBRETRANSLATE_URL = "https://libretranslate.de"
USER_AGENT = "Kingshot-TranslateBot/1.0 (+discord)"

# Default configuration template
DEFAULT_CONFIG = {
    "discord_token": "",
    "deepl": {
        "api_key": "",
        "api_url": "https://api-free.deepl.com/v2/translate",
    },
    "libretranslate": {
        "urls": "https://libretranslate.de,http://localhost:5000",
        "timeout": 8,
    },
    "google": {
        "api_url": "https://translate.googleapis.com/translate_a/single",
    },
    "request_timeout": 10,
    "allowed_channels": "",
    "log_mode": "info",
}

# Environment variable -> config key path. Environment always wins over the file.
ENV_OVERRIDES = {
    "DISCORD_TOKEN": ("discord_token",),
    "DEEPL_KEY": ("deepl", "api_key"),
    "DEEPL_API_URL": ("deepl", "api_url"),
    "LIBRETRANSLATE_URLS": ("libretranslate", "urls"),
    "LIBRETRANSLATE_TIMEOUT": ("libretranslate", "timeout"),
    "GOOGLE_TRANSLATE_URL": ("google", "api_url"),
    "REQUEST_TIMEOUT": ("request_timeout",),
    "ALLOWED_CHANNELS": ("allowed_channels",),
    "LOG_MODE": ("log_mode",),
}


@dataclass(frozen=True)
class TranslatorConfig:
    """Immutable settings for the translation chain, built once at startup."""

    deepl_key: Optional[str] = None
    deepl_url: str = DEFAULT_CONFIG["deepl"]["api_url"]
    libretranslate_urls: Tuple[str, ...] = (DEFAULT_LIBRETRANSLATE_URL,)
    google_url: str = DEFAULT_CONFIG["google"]["api_url"]
    timeout: float = 10.0
    pool_timeout: float = 8.0
    supported_targets: FrozenSet[str] = DEEPL_SUPPORTED_TARGETS
    flag_to_lang: Tuple[Tuple[str, str], ...] = tuple(FLAG_TO_LANG.items())
    user_agent: str = USER_AGENT

    @property
    def has_deepl(self) -> bool:
        return bool(self.deepl_key)


def ensure_config_directory():
    """Ensure the config directory exists."""
    CONFIG_DIR.mkdir(exist_ok=True)
    logger.debug(f"Config directory ensured: {CONFIG_DIR}")

def create_default_config():
    """Create the default config.json file."""
    ensure_config_directory()
    with open(CONFIG_FILE, 'w', encoding='utf-8') as f:
        json.dump(DEFAULT_CONFIG, f, indent=4, ensure_ascii=False)
    logger.info(f"Created default config file: {CONFIG_FILE}")

def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged

def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    for env_name, path in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is None or value == "":
            continue
        target = config
        for key in path[:-1]:
            target = target.setdefault(key, {})
        target[path[-1]] = value
    return config

def load_config() -> Dict[str, Any]:
    """Load the configuration: defaults, then config/config.json, then environment."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if CONFIG_FILE.exists():
        try:
            with open(CONFIG_FILE, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            if isinstance(file_config, dict):
                config = _merge(config, file_config)
                logger.debug("Configuration loaded from file")
            else:
                logger.warning(f"Ignoring {CONFIG_FILE}: top-level value is not an object")
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse config file: {e}")
            logger.warning("Using default configuration")
        except OSError as e:
            logger.error(f"Failed to read config file: {e}")
            logger.warning("Using default configuration")
    return _apply_env_overrides(config)

def save_config(config: Dict[str, Any]):
    """Save the configuration to config/config.json."""
    ensure_config_directory()
    with open(CONFIG_FILE, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=4, ensure_ascii=False)
    logger.info("Configuration saved")
    get_translator_config.cache_clear()

def parse_csv(value: Any) -> Tuple[str, ...]:
    """Split a comma-separated value (or list) into trimmed, non-empty items."""
    if not value:
        return ()
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value).split(',')
    return tuple(str(item).strip() for item in items if str(item).strip())

def _as_float(value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid timeout value {value!r}, using {default}")
        return default
    return number if number > 0 else default

def build_translator_config(config: Optional[Dict[str, Any]] = None) -> TranslatorConfig:
    """Build the immutable translator settings from a loaded configuration dict."""
    if config is None:
        config = load_config()

    deepl = config.get('deepl', {})
    libre = config.get('libretranslate', {})
    google = config.get('google', {})

    endpoints = parse_csv(libre.get('urls')) or (DEFAULT_LIBRETRANSLATE_URL,)

    return TranslatorConfig(
        deepl_key=(deepl.get('api_key') or '').strip() or None,
        deepl_url=deepl.get('api_url') or DEFAULT_CONFIG['deepl']['api_url'],
        libretranslate_urls=endpoints,
        google_url=google.get('api_url') or DEFAULT_CONFIG['google']['api_url'],
        timeout=_as_float(config.get('request_timeout'), 10.0),
        pool_timeout=_as_float(libre.get('timeout'), 8.0),
    )

@lru_cache
def get_translator_config() -> TranslatorConfig:
    """Return cached translator settings."""
    translator_config = build_translator_config()
    logger.info(
        f"Translator configured: deepl={'on' if translator_config.has_deepl else 'off'}, "
        f"libretranslate endpoints={len(translator_config.libretranslate_urls)}"
    )
    return translator_config

def get_discord_token() -> Optional[str]:
    return load_config().get('discord_token') or None

def get_allowed_channels() -> FrozenSet[str]:
    """Channel ids the bot answers in; empty means every channel."""
    return frozenset(parse_csv(load_config().get('allowed_channels')))
