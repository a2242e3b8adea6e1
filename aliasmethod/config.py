"""
Environment-driven settings for aliasmethod.

Values are read once, when the module is first imported:

- ``ALIASMETHOD_VALIDATE``: validate PMFs passed to ``AliasTable.from_pmf``
- ``ALIASMETHOD_CHECK_INVARIANTS``: check every table built by the wrapper
- ``ALIASMETHOD_PMF_ATOL``: tolerance on the PMF sum used by validation
"""

import os


def _bool_env(key: str, default: bool = False) -> bool:
    raw = os.environ.get(key)
    if raw is None:
        return default
    return raw.strip().lower() not in ("", "0", "false", "no", "off")


def _float_env(key: str, default: float) -> float:
    raw = os.environ.get(key, "").strip()
    if raw == "":
        return float(default)
    try:
        out = float(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be a float, got: {raw!r}") from e
    if not out >= 0.0:
        raise ValueError(f"{key} must be >= 0, got: {out}")
    return out


VALIDATE = _bool_env("ALIASMETHOD_VALIDATE")
CHECK_INVARIANTS = _bool_env("ALIASMETHOD_CHECK_INVARIANTS")
PMF_ATOL = _float_env("ALIASMETHOD_PMF_ATOL", 1e-6)
