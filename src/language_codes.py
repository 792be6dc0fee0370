"""
Language code mappings and utilities.

Code spaces:
- DeepL target codes: upper case, optionally region-qualified (EN-US, PT-PT, ZH)
- Base codes: ISO 639-1, lower case, no region (en, pt, zh); used by
  LibreTranslate and the public Google endpoint
"""

from typing import Dict, List, Optional

# ISO 639-1 language codes (2-letter) for the languages the bot can offer
# Source: https://en.wikipedia.org/wiki/List_of_ISO_639-1_codes
ISO_639_1 = {
    'bg': 'Bulgarian',
    'cs': 'Czech',
    'da': 'Danish',
    'de': 'German',
    'el': 'Greek',
    'en': 'English',
    'es': 'Spanish',
    'et': 'Estonian',
    'fi': 'Finnish',
    'fr': 'French',
    'hi': 'Hindi',
    'hu': 'Hungarian',
    'id': 'Indonesian',
    'it': 'Italian',
    'ja': 'Japanese',
    'ko': 'Korean',
    'lt': 'Lithuanian',
    'lv': 'Latvian',
    'nb': 'Norwegian Bokmål',
    'nl': 'Dutch',
    'pl': 'Polish',
    'pt': 'Portuguese',
    'ro': 'Romanian',
    'ru': 'Russian',
    'sk': 'Slovak',
    'sl': 'Slovenian',
    'sv': 'Swedish',
    'tr': 'Turkish',
    'uk': 'Ukrainian',
    'zh': 'Chinese',
}

# Region-qualified variants
REGIONAL_VARIANTS = {
    'en-us': 'English (United States)',
    'en-gb': 'English (United Kingdom)',
    'pt-pt': 'Portuguese (Portugal)',
    'pt-br': 'Portuguese (Brazil)',
    'zh-tw': 'Chinese (Traditional, Taiwan)',
}

ALL_LANGUAGE_CODES = {**ISO_639_1, **REGIONAL_VARIANTS}


def base_code(code: str) -> str:
    """
    Reduce a target code to its base language: text before the first '-', lower-cased.

    Examples:
        >>> base_code('PT-PT')
        'pt'
        >>> base_code('ZH-TW')
        'zh'
        >>> base_code('FR')
        'fr'
    """
    return (code or '').split('-', 1)[0].strip().lower()


def get_language_name(code: str) -> Optional[str]:
    """
    Get the display name for a code in either code space.

    Examples:
        >>> get_language_name('EN-US')
        'English (United States)'
        >>> get_language_name('fr')
        'French'
    """
    if not code:
        return None
    key = code.strip().lower()
    return ALL_LANGUAGE_CODES.get(key) or ISO_639_1.get(base_code(key))


def describe_flags(flag_to_lang: Dict[str, str]) -> List[Dict[str, str]]:
    """List the configured flag buttons with their code and display name, in order."""
    return [
        {
            'flag': flag,
            'code': code,
            'name': get_language_name(code) or code,
        }
        for flag, code in flag_to_lang.items()
    ]
