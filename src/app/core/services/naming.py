"""Generated-name convention for channel projections."""

from __future__ import annotations

from src.app.core.models import Deployable


def generated_name_prefix(deployable: Deployable) -> str:
    """Return the generate-name given to projections of a deployable.

    The prefix is the deployable's own generate-name when set, otherwise its
    name, followed by ``-``. It is also the key used to recognize existing
    projections, so it must stay stable for an unchanged deployable.
    """
    base = deployable.generate_name or deployable.name
    return f"{base}-"
