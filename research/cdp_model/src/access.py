"""Role based capabilities for privileged calls

Each collaborator that gates a call (the price feed, the collateral treasury,
the stablecoin minter, the engine's rebalance path) owns an AccessControl.
A caller presents a Credential issued by that AccessControl; the collaborator
checks it before honouring the call. Credentials carry a random token, so a
caller cannot forge one by naming a privileged account.
"""
import logging
import secrets
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

from .errors import UnauthorizedError

logger = logging.getLogger(__name__)


class Role(Enum):
    ADMIN = "admin"
    PRICE_UPDATER = "price_updater"   # can publish a price round
    TREASURY = "treasury"             # can mint collateral
    MINTER = "minter"                 # can mint and burn the stablecoin
    KEEPER = "keeper"                 # can rebalance positions


@dataclass(frozen=True)
class Credential:
    """Proof of a role presented by its holder"""
    holder: str
    role: Role
    token: str = field(default="", repr=False, compare=False)


class AccessControl:
    """Role registry owned by a single collaborator"""

    def __init__(self, admin: str):
        self._issued: Dict[Tuple[Role, str], str] = {}
        self.admin = admin
        self.admin_credential = self._issue(Role.ADMIN, admin)

    def _issue(self, role: Role, holder: str) -> Credential:
        token = secrets.token_hex(16)
        self._issued[(role, holder)] = token
        return Credential(holder, role, token)

    def has_role(self, role: Role, holder: str) -> bool:
        return (role, holder) in self._issued

    def grant(self, admin: Credential, role: Role, holder: str) -> Credential:
        """Grant role to holder and return the holder's credential.

        Granting again re-issues the credential and invalidates the old one.
        """
        self.require(admin, Role.ADMIN)
        credential = self._issue(role, holder)
        logger.debug("granted %s to %s", role.name, holder)
        return credential

    def revoke(self, admin: Credential, role: Role, holder: str) -> None:
        self.require(admin, Role.ADMIN)
        self._issued.pop((role, holder), None)
        logger.debug("revoked %s from %s", role.name, holder)

    def require(self, credential: Credential, role: Role) -> None:
        issued = self._issued.get((role, credential.holder))
        if credential.role is not role or issued is None or issued != credential.token:
            raise UnauthorizedError(credential.holder, role)
