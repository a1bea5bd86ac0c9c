# src/common/localization.py
"""
Модуль локализации.
Загружает и предоставляет доступ к переводам из lang_dict.json.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any


FALLBACK_LANGUAGE = "ar"


def get_lang_dict_path() -> Path:
    """Возвращает путь к файлу локализации."""
    return Path(__file__).parent.parent.parent / "config" / "lang_dict.json"


@lru_cache()
def load_lang_dict() -> dict[str, dict[str, str]]:
    """
    Загружает словарь локализации из JSON файла.
    Результат кэшируется.

    Returns:
        Словарь вида {KEY: {lang: text}}
    """
    lang_path = get_lang_dict_path()
    if not lang_path.exists():
        raise FileNotFoundError(f"Файл локализации не найден: {lang_path}")

    with open(lang_path, "r", encoding="utf-8") as f:
        return json.load(f)


def get_default_language() -> str:
    """Язык по умолчанию из конфигурации (ar, если конфигурация недоступна)."""
    try:
        from src.config import settings

        lang = settings.domain.DEFAULT_LANGUAGE
    except Exception:
        return FALLBACK_LANGUAGE
    return lang if isinstance(lang, str) else FALLBACK_LANGUAGE


def get_text(
    key: str,
    lang: str | None = None,
    default: str | None = None,
    **kwargs: Any,
) -> str:
    """
    Получает локализованный текст по ключу.

    Порядок поиска: запрошенный язык, язык по умолчанию, любой
    доступный перевод. Если ключа нет, возвращается default или "[KEY]".

    Args:
        key: Ключ перевода
        lang: Код языка (ar, en, ru); None означает язык по умолчанию
        default: Значение, если ключ не найден
        **kwargs: Параметры для форматирования строки

    Example:
        >>> get_text("MATCH_REASON_DATE_CLOSE", "en", days=2)
        "Only 2 days apart"
    """
    try:
        lang_dict = load_lang_dict()
    except FileNotFoundError:
        return default if default else f"[{key}]"

    translations = lang_dict.get(key)
    if not translations:
        return default if default else f"[{key}]"

    text = translations.get(lang or get_default_language())
    if not text:
        text = translations.get(get_default_language())
    if not text:
        text = next(iter(translations.values()), f"[{key}]")

    if kwargs:
        try:
            text = text.format(**kwargs)
        except KeyError:
            pass  # недостающие плейсхолдеры оставляем как есть

    return text


def get_available_languages() -> list[str]:
    """
    Возвращает список языков, для которых есть переводы.

    Returns:
        Список кодов языков
    """
    try:
        lang_dict = load_lang_dict()
    except FileNotFoundError:
        return [FALLBACK_LANGUAGE]
    first_key = next(iter(lang_dict.values()), {})
    return list(first_key.keys())


def validate_lang_dict() -> list[str]:
    """
    Проверяет, что каждый ключ переведён на все доступные языки.

    Returns:
        Список ошибок (пустой, если всё в порядке)
    """
    try:
        lang_dict = load_lang_dict()
    except FileNotFoundError as e:
        return [str(e)]

    errors = []
    available = set(get_available_languages())

    for key, translations in lang_dict.items():
        if not isinstance(translations, dict):
            errors.append(f"Ключ '{key}' имеет неверный формат")
            continue

        missing = available - set(translations.keys())
        if missing:
            errors.append(f"Ключ '{key}' не имеет перевода для языков: {sorted(missing)}")

    return errors
