"""
PasteShare Backend - Language Table
====================================

What:  The closed set of paste languages with their display labels and
       download file extensions.
Who:   Used by the paste repository (labels in responses), the download
       route (file naming) and GET /api/languages.

Any other language value may still be stored; it gets its raw value as the
label and the `txt` extension.
"""

import re
from typing import Dict, List, NamedTuple

DEFAULT_LANGUAGE = "text"
ALL_LANGUAGES = "all"  # list filter value meaning "no language filter"
FALLBACK_EXTENSION = "txt"


class Language(NamedTuple):
    value: str
    label: str
    extension: str


LANGUAGES: List[Language] = [
    Language("text", "Plain Text", "txt"),
    Language("javascript", "JavaScript", "js"),
    Language("typescript", "TypeScript", "ts"),
    Language("python", "Python", "py"),
    Language("java", "Java", "java"),
    Language("cpp", "C++", "cpp"),
    Language("html", "HTML", "html"),
    Language("css", "CSS", "css"),
    Language("json", "JSON", "json"),
    Language("xml", "XML", "xml"),
    Language("sql", "SQL", "sql"),
    Language("bash", "Bash", "sh"),
]

_BY_VALUE: Dict[str, Language] = {lang.value: lang for lang in LANGUAGES}

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def is_known(language: str) -> bool:
    return language in _BY_VALUE


def language_label(language: str) -> str:
    """Display label for a language value; unknown values are shown as-is."""
    known = _BY_VALUE.get(language)
    return known.label if known else language


def file_extension(language: str) -> str:
    known = _BY_VALUE.get(language)
    return known.extension if known else FALLBACK_EXTENSION


def download_filename(title: str, language: str) -> str:
    """
    Build the attachment filename for a paste download.

    Every character outside [a-z0-9] (either case) becomes "_", the result
    is lower-cased and the language extension is appended:

        download_filename("My Script!", "python") -> "my_script_.py"
    """
    stem = _UNSAFE_FILENAME_CHARS.sub("_", title).lower()
    return f"{stem}.{file_extension(language)}"
