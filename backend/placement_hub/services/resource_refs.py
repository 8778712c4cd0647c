"""
Resource references - recover Cloudinary public IDs from stored resume URLs.

Applications store the delivery URL returned at upload time, e.g.

    https://res.cloudinary.com/<cloud>/raw/upload/v1712345678/placement/resumes/cv_42.pdf

Destroying or bundling a resource needs its public ID and resource type
instead. Only IDs under the configured resume folder are ever acted on.
"""
import re
from typing import Dict, Iterable, Optional
from urllib.parse import unquote, urlparse

from pydantic import BaseModel

DEFAULT_KIND = "raw"
RESOURCE_KINDS = ("image", "raw", "video")
DELIVERY_TYPES = ("upload", "private", "authenticated")

_VERSION = re.compile(r"^v\d+$")
# e.g. "c_fill,w_200" or "fl_attachment"
_TRANSFORMATION = re.compile(r"^[a-z]{1,3}_[^,]*(,[a-z]{1,3}_[^,]*)*$")

# Cloudinary transformation parameter keys
TRANSFORMATION_KEYS = frozenset((
    "a", "ac", "af", "ar", "b", "bo", "br", "c", "co", "cs", "d", "dl", "dn", "dpr",
    "du", "e", "eo", "f", "fl", "fn", "fps", "g", "h", "if", "ki", "l", "o", "p",
    "pg", "q", "r", "so", "sp", "t", "u", "vc", "vs", "w", "x", "y", "z",
))


class ResourceRef(BaseModel):
    storage_id: str
    kind: str = DEFAULT_KIND


def _strip_extension(public_id: str) -> str:
    folder, _, filename = public_id.rpartition("/")
    stem = filename.rsplit(".", 1)[0] if "." in filename else filename
    return f"{folder}/{stem}" if folder else stem


def _is_known_transformation(segment: str) -> bool:
    return bool(_TRANSFORMATION.match(segment)) and all(
        part.split("_", 1)[0] in TRANSFORMATION_KEYS for part in segment.split(",")
    )


def _public_id_segments(segments):
    """Drop the optional transformation and version segments before the public ID"""
    version_at = next((i for i, s in enumerate(segments) if _VERSION.match(s)), None)
    if version_at is not None and all(_TRANSFORMATION.match(s) for s in segments[:version_at]):
        return segments[version_at + 1:]

    # Without a version, a folder like "cv_bank" must not pass for a transformation
    index = 0
    while index < len(segments) and _is_known_transformation(segments[index]):
        index += 1
    return segments[index:]


def extract(stored_ref: Optional[str]) -> Optional[ResourceRef]:
    """Parse a stored delivery URL into a ResourceRef; None if it isn't one"""
    if not stored_ref or not stored_ref.strip():
        return None

    try:
        parsed = urlparse(stored_ref.strip())
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None

    segments = [unquote(s) for s in parsed.path.split("/") if s]
    for index in range(len(segments) - 1):
        if segments[index] in RESOURCE_KINDS and segments[index + 1] in DELIVERY_TYPES:
            kind = segments[index]
            remainder = _public_id_segments(segments[index + 2:])
            break
    else:
        return None

    if not remainder:
        return None

    public_id = "/".join(remainder)
    # Raw public IDs keep their extension; image/video IDs do not
    if kind != "raw":
        public_id = _strip_extension(public_id)
    if not public_id:
        return None
    return ResourceRef(storage_id=public_id, kind=kind)


def in_namespace(storage_id: str, prefix: str) -> bool:
    """True when storage_id sits inside the prefix folder"""
    folder = prefix.strip("/")
    if not folder or not storage_id.startswith(folder + "/"):
        return False
    return ".." not in storage_id.split("/")


def collect_resource_refs(stored_refs: Iterable[Optional[str]], prefix: str) -> Dict[str, str]:
    """
    Extract and deduplicate resume resources.

    Args:
        stored_refs: Resume references as stored on applications (may contain None)
        prefix: Folder every acted-on public ID must live under

    Returns:
        Mapping of public ID to resource type, in first-seen order
    """
    refs: Dict[str, str] = {}
    for stored_ref in stored_refs:
        ref = extract(stored_ref)
        if ref is None or not in_namespace(ref.storage_id, prefix):
            continue
        refs.setdefault(ref.storage_id, ref.kind or DEFAULT_KIND)
    return refs
