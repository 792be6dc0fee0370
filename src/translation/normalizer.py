"""
Text normalization applied before translation.

A few short greetings translate poorly (or not at all) through the machine
translation providers, so they are mapped to a canonical English phrase first.
"""

from typing import Optional

# Lookup keys are stripped and lower-cased
PHRASE_TABLE = {
    'もし もし': 'hello',
    'もしもし': 'hello',
    'こんにちは': 'hello',
    'こんばんは': 'good evening',
    'ありがとう': 'thank you',
    'afrikaans dankie': 'thank you',
    'dankie': 'thank you',
}


def normalize(text: Optional[str]) -> str:
    """
    Replace a known phrase with its canonical form.

    The whole message must match a table entry (ignoring surrounding
    whitespace and case). Anything else is returned unchanged.

    Examples:
        >>> normalize('  ありがとう ')
        'thank you'
        >>> normalize('Dankie')
        'thank you'
        >>> normalize(' Good morning ')
        ' Good morning '
    """
    text = text or ''
    return PHRASE_TABLE.get(text.strip().lower(), text)
