"""Known operating system and architecture names."""

from __future__ import annotations

KNOWN_OS = frozenset(
    {
        "aix", "android", "darwin", "dragonfly", "freebsd", "hurd", "illumos",
        "ios", "js", "linux", "nacl", "netbsd", "openbsd", "plan9", "solaris",
        "windows", "zos",
    }
)

KNOWN_ARCH = frozenset(
    {
        "386", "amd64", "amd64p32", "arm", "armbe", "arm64", "arm64be",
        "loong64", "mips", "mipsle", "mips64", "mips64le", "mips64p32",
        "mips64p32le", "ppc", "ppc64", "ppc64le", "riscv", "riscv64", "s390",
        "s390x", "sparc", "sparc64", "wasm",
    }
)


def is_known_os(name: str) -> bool:
    """Tell whether the name is a known operating system."""
    return name in KNOWN_OS


def is_known_arch(name: str) -> bool:
    """Tell whether the name is a known architecture."""
    return name in KNOWN_ARCH