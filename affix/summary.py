"""
Table statistics for parsed .aff files.

Works on anything shaped like AffParser.data(): a mapping of uppercase
command -> list of parameter lines.
"""

from collections import Counter
from typing import Dict, Iterable, List, Mapping


def summarize(table: Mapping[str, List[str]]) -> Dict:
    counts = {cmd: len(params) for cmd, params in table.items()}
    return {
        "command_count": len(counts),
        "parameter_count": sum(counts.values()),
        "bare_commands": sorted(cmd for cmd, n in counts.items() if n == 0),
        "top": sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])),
    }


def merge_counts(results: Iterable[Dict]) -> Counter:
    """Parameter lines per command over several scan results (failed files skipped)."""
    total = Counter()
    for r in results:
        if not r.get("ok"):
            continue
        for cmd, params in (r.get("commands") or {}).items():
            total[cmd] += len(params)
    return total
