from pathlib import Path


def read_text(p: Path) -> str:
    return p.read_text(encoding="utf-8") if p.exists() else ""


def uniq(xs):
    seen, out = set(), []
    for x in xs:
        if x and x not in seen:
            out.append(x)
            seen.add(x)
    return out
