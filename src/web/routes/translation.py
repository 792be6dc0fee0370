"""Translation API routes."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, jsonify, request

import src.language_codes as lc
from src.config import get_translator_config
from src.logger import get_logger
from src.translation import get_translation_service

translation_bp = Blueprint("translation", __name__)
logger = get_logger(__name__)


@translation_bp.get("/languages")
def list_languages():
    """Return the flag buttons offered to users, in display order."""
    return jsonify({"languages": lc.describe_flags(dict(get_translator_config().flag_to_lang))})


@translation_bp.post("/translate")
def translate_text():
    """Translate a message through the provider chain."""
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    text = data.get("text")
    target = data.get("target")

    if not isinstance(text, str) or not text.strip():
        return jsonify({"error": "No text to translate"}), 400
    if not isinstance(target, str) or not target.strip():
        return jsonify({"error": "Target language is required"}), 400

    target = target.strip()
    outcome = get_translation_service().translate_detailed(text.strip(), target)
    logger.debug(f"Translate request to {target} served by {outcome.provider}")

    return jsonify({
        "text": text,
        "target": target,
        "translation": outcome.text,
        "provider": outcome.provider,
        "degraded": outcome.degraded,
    })
