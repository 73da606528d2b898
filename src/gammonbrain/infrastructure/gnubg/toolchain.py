from __future__ import annotations

import platform
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import structlog

REQUIRED_TOOLS = ("autoconf", "automake", "libtool", "make", "pkg-config")
OPTIONAL_TOOLS = ("gcc", "clang", "python3")
CONFIGURE_ARGS = ("--enable-simd=yes", "--with-gtk", "--with-python")

logger = structlog.get_logger("gammonbrain.gnubg.toolchain")


@dataclass(frozen=True, slots=True)
class DependencyInstructions:
    platform_name: str
    package_manager: str
    install_command: str
    setup_instructions: list[str] = field(default_factory=list)


def dependency_instructions(
    system: str | None = None,
    os_release: Path = Path("/etc/os-release"),
) -> DependencyInstructions:
    """Platform-specific hints for installing the gnubg build toolchain."""
    name = (system or platform.system()).lower()

    if name == "darwin":
        return DependencyInstructions(
            platform_name="macOS",
            package_manager="Homebrew",
            install_command="brew install autoconf automake libtool pkg-config glib gtk+ readline sqlite",
            setup_instructions=[
                "Install Homebrew if not already installed:",
                '/bin/bash -c "$(curl -fsSL https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh)"',
            ],
        )

    if name == "linux":
        try:
            release = os_release.read_text(encoding="utf-8")
        except OSError:
            release = ""
        if "Ubuntu" in release or "Debian" in release:
            return DependencyInstructions(
                platform_name="Ubuntu/Debian",
                package_manager="apt",
                install_command=(
                    "sudo apt-get update && sudo apt-get install build-essential autoconf automake "
                    "libtool pkg-config libglib2.0-dev libgtk2.0-dev libreadline-dev libsqlite3-dev"
                ),
            )
        if any(token in release for token in ("CentOS", "Red Hat", "Fedora")):
            return DependencyInstructions(
                platform_name="Red Hat/CentOS/Fedora",
                package_manager="yum/dnf",
                install_command=(
                    "sudo yum install -y autoconf automake libtool pkgconfig glib2-devel "
                    "gtk2-devel readline-devel sqlite-devel gcc make"
                ),
            )
        return DependencyInstructions(
            platform_name="Linux",
            package_manager="package manager",
            install_command=(
                "Install: build-essential autoconf automake libtool pkg-config "
                "libglib2.0-dev libgtk2.0-dev"
            ),
            setup_instructions=[
                "Use your distribution's package manager to install the dependencies above",
            ],
        )

    return DependencyInstructions(
        platform_name=system or platform.system(),
        package_manager="system package manager",
        install_command="Install required development tools and libraries",
        setup_instructions=[
            "Please refer to your system documentation for installing development dependencies",
        ],
    )


def check_dependencies(which: Callable[[str], str | None] = shutil.which) -> list[str]:
    """Return the required build tools missing from ``PATH``."""
    missing = [tool for tool in REQUIRED_TOOLS if which(tool) is None]
    absent_optional = [tool for tool in OPTIONAL_TOOLS if which(tool) is None]
    logger.info(
        "gnubg_dependencies_checked",
        missing=missing,
        missing_optional=absent_optional,
    )
    return missing


def configure_gnubg(
    gnubg_dir: Path,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> bool:
    if not gnubg_dir.is_dir():
        logger.error("gnubg_source_missing", path=str(gnubg_dir))
        return False

    autogen = gnubg_dir / "autogen.sh"
    if autogen.exists():
        autogen.chmod(0o755)

    command = ["./configure", *CONFIGURE_ARGS]
    logger.info("gnubg_configure_started", command=" ".join(command))
    try:
        runner(command, cwd=gnubg_dir, check=True)
    except (subprocess.CalledProcessError, OSError) as exc:
        logger.error("gnubg_configure_failed", error=str(exc))
        return False

    logger.info("gnubg_configured")
    return True


def build_gnubg(
    gnubg_dir: Path,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> bool:
    if not (gnubg_dir / "Makefile").exists():
        logger.error("gnubg_not_configured", path=str(gnubg_dir))
        return False

    logger.info("gnubg_build_started")
    try:
        runner(["make"], cwd=gnubg_dir, check=True)
    except (subprocess.CalledProcessError, OSError) as exc:
        logger.error("gnubg_build_failed", error=str(exc))
        return False

    if not (gnubg_dir / "gnubg").exists():
        logger.warning("gnubg_binary_missing", path=str(gnubg_dir / "gnubg"))
        return False

    logger.info("gnubg_built", path=str(gnubg_dir / "gnubg"))
    return True


__all__ = [
    "CONFIGURE_ARGS",
    "DependencyInstructions",
    "OPTIONAL_TOOLS",
    "REQUIRED_TOOLS",
    "build_gnubg",
    "check_dependencies",
    "configure_gnubg",
    "dependency_instructions",
]
