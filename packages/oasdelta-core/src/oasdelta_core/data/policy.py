# oasdelta_core/data/policy.py
from pathlib import Path

from oasdelta_core.data.loader import load_document_typed
from oasdelta_core.models.policy import DiffPolicy


def load_diff_policy(path: str | Path | None = None) -> DiffPolicy:
    """Policy from ``path`` (defaults when None), with environment overrides applied."""
    if path is None:
        return DiffPolicy.from_env()
    return load_document_typed(Path(path), model=DiffPolicy).with_env()
