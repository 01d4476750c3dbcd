"""
Supported languages

Maps the user-facing language key to JDoodle execution parameters and a
starter template containing the insertion marker.
"""

from dataclasses import dataclass
from typing import Dict, List

from .config import INSERTION_MARKER
from .types import UnsupportedLanguageError


@dataclass(frozen=True)
class LanguageSpec:
    """Execution parameters + template for one language"""
    key: str
    language_id: str
    version_index: str
    template: str


PYTHON_TEMPLATE = f"""# Python 3 Template
# {INSERTION_MARKER}"""

CPP_TEMPLATE = f"""#include <iostream>
using namespace std;

int main() {{
    // {INSERTION_MARKER}
    return 0;
}}"""

JAVA_TEMPLATE = f"""public class Main {{
    public static void main(String[] args) {{
        // {INSERTION_MARKER}
    }}
}}"""

C_TEMPLATE = f"""#include <stdio.h>

int main() {{
    // {INSERTION_MARKER}
    return 0;
}}"""

JAVASCRIPT_TEMPLATE = f"""// JavaScript Template
// {INSERTION_MARKER}"""


LANGUAGES: Dict[str, LanguageSpec] = {
    spec.key: spec
    for spec in [
        LanguageSpec("Python 3", "python3", "3", PYTHON_TEMPLATE),
        LanguageSpec("Java", "java", "4", JAVA_TEMPLATE),
        LanguageSpec("C", "c", "5", C_TEMPLATE),
        LanguageSpec("C++", "cpp17", "0", CPP_TEMPLATE),
        LanguageSpec("JavaScript", "nodejs", "4", JAVASCRIPT_TEMPLATE),
    ]
}

DEFAULT_LANGUAGE = "Python 3"


def resolve_language(language_key: str) -> LanguageSpec:
    """
    Look up a language key

    Raises:
        UnsupportedLanguageError: key not in the table
    """
    spec = LANGUAGES.get(language_key)
    if spec is None:
        raise UnsupportedLanguageError(language_key)
    return spec


def template_for(language_key: str) -> str:
    """Starter template for a language"""
    return resolve_language(language_key).template


def supported_languages() -> List[str]:
    return list(LANGUAGES)
