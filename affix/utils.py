import codecs
import logging
import os
import re

logger = logging.getLogger(__name__)

DEFAULT_EXTS = (".aff",)

_SET_LINE = re.compile(r"^[ \t\v\f]*set[ \t\v\f]+(\S+)", re.IGNORECASE | re.MULTILINE)


def collect_files(path, exts=DEFAULT_EXTS):
    if os.path.isfile(path):
        return [path]
    wanted = {e.lower() for e in exts}
    files = []
    for root, _, fnames in os.walk(path):
        for fn in fnames:
            if os.path.splitext(fn)[1].lower() in wanted:
                files.append(os.path.join(root, fn))
    return sorted(files)


def resolve_codec(name):
    """Map a Hunspell SET value (e.g. ISO8859-2, microsoft-cp1251) to a codec name."""
    if not name:
        return None
    candidate = name.strip()
    if candidate.lower().startswith("microsoft-"):
        candidate = candidate[len("microsoft-"):]
    try:
        return codecs.lookup(candidate).name
    except LookupError:
        return None


def sniff_encoding(path, default="utf-8"):
    """Encoding declared by the first SET command of an .aff file, else ``default``."""
    with open(path, "rb") as fh:
        raw = fh.read()
    m = _SET_LINE.search(raw.decode("latin-1"))
    if not m:
        return default
    codec = resolve_codec(m.group(1))
    if codec is None:
        logger.warning("%s: unsupported SET encoding %r, using %s", path, m.group(1), default)
        return default
    return codec
