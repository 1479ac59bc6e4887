"""Core constants: languages and shared literal values.

Single source of truth for language codes and display names used by the
message catalogs and the transport adapter.
"""

# Languages every catalog carries texts for; the first is the default.
LANGUAGE_VI = "vi"
LANGUAGE_EN = "en"
LANGUAGE_KO = "ko"
SUPPORTED_LANGUAGES = (LANGUAGE_VI, LANGUAGE_EN, LANGUAGE_KO)
DEFAULT_LANGUAGE = LANGUAGE_VI

# Display names, used in messages that mention a language (e.g. duplicate names).
LANGUAGE_NAMES = {
    LANGUAGE_VI: "Tiếng Việt",
    LANGUAGE_EN: "English",
    LANGUAGE_KO: "한국어",
}

API_V1_PREFIX = "/api/v1"
