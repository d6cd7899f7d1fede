"""Generation of the extdep.mak fragment from a manifest."""

from __future__ import annotations

_HEADER = "# Auto-generated by torc — do not edit\n"


def generate_extdep_mak(manifest):
    """Return the extdep.mak text for *manifest*'s packages."""
    cxxflags = []
    ldflags = []
    libs = []
    for pkg in manifest.packages:
        prefix = f"{manifest.depdir}/{pkg.name}/{pkg.version}"
        cxxflags.append(f" \\\n    -I{prefix}/include")
        ldflags.append(f" \\\n    -L{prefix}/lib")
        libs.append(f" -l{pkg.lib_name}")
    return (
        _HEADER
        + f"TORC_CXXFLAGS ={''.join(cxxflags)}\n"
        + f"TORC_LDFLAGS  ={''.join(ldflags)}\n"
        + f"TORC_LIBS     ={''.join(libs)}\n"
    )


def write_mak(path, content):
    """Write *content* to *path*; raises OSError on failure."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)