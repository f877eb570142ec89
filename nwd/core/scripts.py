"""Page-side script sources sent through ``execute``."""

from __future__ import annotations

import textwrap

NEED_HELPER = "needFunc"

VISIBILITY_HELPER = "___nwdIsVisible"


def injection_source(source: str) -> str:
    """Normalize an inline page script: dedent and drop surrounding blank lines."""
    return textwrap.dedent(source).strip() + "\n"


VISIBILITY_HELPER_SOURCE = injection_source(
    f"""
    function {VISIBILITY_HELPER}(element) {{
        if (!element) return false;
        return (
            element.style.display !== 'none'
                ? (element.offsetWidth > 0 || element.offsetHeight > 0)
                : false
        );
    }}
    """
)

# Promotes a helper declared in the same script to window, or reports that
# the page has neither.
VISIBILITY_CHECK_SOURCE = injection_source(
    f"""
    if (typeof window.{VISIBILITY_HELPER} !== 'function') {{
        if (typeof {VISIBILITY_HELPER} !== 'function') return '{NEED_HELPER}';
        window.{VISIBILITY_HELPER} = {VISIBILITY_HELPER};
    }}
    return window.{VISIBILITY_HELPER}(arguments[0]);
    """
)

IS_DISABLED_SOURCE = "return arguments[0].disabled;"


def visibility_script(with_helper: bool) -> str:
    if with_helper:
        return VISIBILITY_HELPER_SOURCE + VISIBILITY_CHECK_SOURCE
    return VISIBILITY_CHECK_SOURCE
