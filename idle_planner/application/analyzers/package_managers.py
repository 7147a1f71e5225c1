"""Package manager command sets used in remediation suggestions."""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageManagerCommands:
    """Shell command templates for one package manager ecosystem."""

    name: str
    update: str
    install: str
    uninstall: str
    audit: str
    audit_fix: str
    list_outdated: str
    alternative_name: str
    alternative_upgrade: str
    alternative_audit_fix: str

    def update_packages(self, names: list[str]) -> str:
        """Update command for the given packages; bare update when empty."""
        if not names:
            return self.update
        return f"{self.update} {' '.join(names)}"

    def upgrade_with_alternative(self, names: list[str]) -> str:
        if not names:
            return self.alternative_upgrade
        return f"{self.alternative_upgrade} {' '.join(names)}"

    def replace_package(self, old: str, new: str) -> str:
        """Uninstall/install pair that swaps one package for another."""
        return f"{self.uninstall} {old} && {self.install} {new}"


NPM = PackageManagerCommands(
    name="npm",
    update="npm update",
    install="npm install",
    uninstall="npm uninstall",
    audit="npm audit",
    audit_fix="npm audit fix",
    list_outdated="npm outdated",
    alternative_name="Yarn",
    alternative_upgrade="yarn upgrade",
    alternative_audit_fix="yarn audit --fix",
)

PIP = PackageManagerCommands(
    name="pip",
    update="pip install --upgrade",
    install="pip install",
    uninstall="pip uninstall -y",
    audit="pip-audit",
    audit_fix="pip-audit --fix",
    list_outdated="pip list --outdated",
    alternative_name="uv",
    alternative_upgrade="uv pip install --upgrade",
    alternative_audit_fix="uvx pip-audit --fix",
)

PACKAGE_MANAGERS: dict[str, PackageManagerCommands] = {
    NPM.name: NPM,
    PIP.name: PIP,
}


def get_package_manager(name: str) -> PackageManagerCommands:
    """Return the command set for name. Unknown names fall back to npm."""
    commands = PACKAGE_MANAGERS.get(name.strip().lower())
    if commands is None:
        logger.warning("Unknown package manager %r, falling back to npm", name)
        return NPM
    return commands
