from __future__ import annotations

import os
from typing import Optional, Tuple


def member_path(identifier: str, name: str) -> str:
    """Tar member name for ``name`` inside the ``identifier`` group."""
    return f"./{identifier}/{name}"


def split_member(full_name: str) -> Optional[Tuple[str, str]]:
    """Split a tar member name into ``(identifier, kind)``.

    The identifier is the second-to-last path segment and the kind is the
    suffix of the last segment after its final '.', so ``./abc/asset.meta``
    gives ``("abc", "meta")`` and ``abc/pathname`` gives ``("abc", "pathname")``.
    Returns None when there is no identifier segment (or it is "." or "..").
    """
    parts = full_name.split("/")
    if len(parts) < 2:
        return None
    identifier = parts[-2]
    if identifier in ("", ".", ".."):
        return None
    kind = parts[-1].rsplit(".", 1)[-1]
    return identifier, kind


def norm_path(p: str) -> str:
    """Normalize an asset pathname to a relative forward-slash form.

    Rules:
    - Only the first line is used (older packages append extra lines)
    - Convert backslashes to slashes
    - Strip leading/trailing slashes
    - Remove empty and '.' segments
    - Reject '..' segments
    """
    p = p.splitlines()[0] if p else ""
    p = p.replace("\\", "/").strip("/")
    parts = [q for q in p.split("/") if q not in ("", ".")]
    for q in parts:
        if q == "..":
            raise ValueError("Path may not contain '..'")
    if not parts:
        raise ValueError("Empty pathname")
    return "/".join(parts)


def dest_path(outdir: str, pathname: str) -> str:
    """Filesystem destination for ``pathname`` below ``outdir``."""
    return os.path.join(outdir, *norm_path(pathname).split("/"))
