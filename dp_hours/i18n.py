"""Translation of labels and messages through gettext.

The application is written, and shipped, in English only: no catalog is
installed with the package. A deployment may add one under
``locales/<lang>/LC_MESSAGES/messages.mo`` next to this module, and
:func:`setup_i18n` picks it up for the configured language. Any language
without a catalog keeps the English strings.
"""

import gettext
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SOURCE_LANGUAGE = "en"
LOCALE_DIR = Path(__file__).parent / "locales"

_catalog: gettext.NullTranslations = gettext.NullTranslations()


def setup_i18n(language: str, locale_dir: Path = LOCALE_DIR) -> bool:
    """Use the catalog of a language for the translated strings.

    Args:
        language: ISO 639-1 language code, e.g. ``"en"``.
        locale_dir: Directory holding the compiled catalogs.

    Returns:
        Whether the strings are now in the requested language. English
        always is; any other language needs a catalog.
    """
    global _catalog  # pylint: disable=global-statement
    _catalog = gettext.translation(
        "messages", localedir=str(locale_dir), languages=[language], fallback=True
    )
    if language == SOURCE_LANGUAGE:
        return True
    if not isinstance(_catalog, gettext.GNUTranslations):
        logger.warning(
            "No '%s' catalog in %s, messages stay in English", language, locale_dir
        )
        return False
    return True


def _(message: str) -> str:
    """Return the translated string for *message*."""
    return _catalog.gettext(message)
