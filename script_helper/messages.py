"""Localized advisory messages for the CLI and the HTTP API.

WHY: Nothing in the core fails on content; "no titles found" and similar
conditions are advisories shown to the user. Users work in English or
Portuguese, and the placeholder for an untitled section must match the
language of the rest of the output.

HOW: MESSAGES maps a language code to a key → template dict. translate()
looks the key up, falls back to English and then to the key itself, and
fills ``{name}`` placeholders from keyword arguments.

RULES:
- Every key exists in English; other languages may be partial
- Unknown languages fall back to English
- Placeholders use str.format syntax
"""

from __future__ import annotations

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "no_title": "(No title)",
        "no_titles_found": "No titles found. Use ## to mark titles.",
        "no_topics_found": "No topics found. Use ## to mark titles.",
        "titles_extracted": "{count} titles extracted!",
        "topics_found": "{count} topics found!",
        "spreadsheet_generated": "Spreadsheet generated with {count} topics!",
        "srt_updated": "SRT updated!",
        "no_srt_to_download": "No SRT to download.",
    },
    "pt": {
        "no_title": "(Sem título)",
        "no_titles_found": "Nenhum título encontrado. Use ## para marcar títulos.",
        "no_topics_found": "Nenhum tópico encontrado. Use ## para marcar títulos.",
        "titles_extracted": "{count} títulos extraídos!",
        "topics_found": "{count} tópicos encontrados!",
        "spreadsheet_generated": "Planilha gerada com {count} tópicos!",
        "srt_updated": "SRT atualizado!",
        "no_srt_to_download": "Nenhum SRT para baixar.",
    },
}


def translate(key: str, lang: str = "en", **params: object) -> str:
    """Return the message for key in lang with placeholders filled in."""
    template = MESSAGES.get(lang, {}).get(key) or MESSAGES["en"].get(key) or key
    if params:
        return template.format(**params)
    return template
