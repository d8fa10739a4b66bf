"""
TrackSure Provenance Engine — Identity Registry
=================================================
Participant records keyed by caller identity.

- register: self-registration, always unverified
- verify:   administrator only, idempotent, never reverts
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from core.commands.outcomes import OperationOutcome
from core.commands.rejection import ReasonCode, RejectionReason
from core.config import RegistryConfig
from engines.provenance.models import Participant
from engines.provenance.policies import administrator_only_policy, is_verified
from engines.provenance.store import CustodyStore

logger = logging.getLogger("tracksure.identity")


class IdentityRegistry:
    def __init__(self, *, store: CustodyStore, config: RegistryConfig):
        self._store = store
        self._config = config

    def register(self, identity: str, name: str, role: str) -> OperationOutcome:
        with self._store.atomic():
            if self._store.get_participant(identity) is not None:
                logger.info(f"Registration of '{identity}' rejected: already exists")
                return OperationOutcome.rejected(RejectionReason(
                    code=ReasonCode.ALREADY_EXISTS,
                    message=f"Participant '{identity}' is already registered.",
                    policy_name="identity_registry",
                ))

            self._store.save_participant(
                Participant(identity=identity, name=name, role=role)
            )

        logger.info(f"Participant '{identity}' registered as '{role}'")
        return OperationOutcome.ok(True)

    def verify(self, caller: str, identity: str) -> OperationOutcome:
        with self._store.atomic():
            rejection = administrator_only_policy(self._config, caller)
            if rejection is not None:
                logger.info(
                    f"Verification of '{identity}' rejected by "
                    f"'{rejection.policy_name}'"
                )
                return OperationOutcome.rejected(rejection)

            participant = self._store.get_participant(identity)
            if participant is None:
                logger.info(f"Verification of '{identity}' rejected: not found")
                return OperationOutcome.rejected(RejectionReason(
                    code=ReasonCode.NOT_FOUND,
                    message=f"Participant '{identity}' is not registered.",
                    policy_name="identity_registry",
                ))

            if not participant.verified:
                self._store.save_participant(
                    dataclasses.replace(participant, verified=True)
                )

        logger.info(f"Participant '{identity}' verified by '{caller}'")
        return OperationOutcome.ok(True)

    def is_verified(self, identity: str) -> bool:
        return is_verified(self._store, identity)

    def get(self, identity: str) -> Optional[Participant]:
        return self._store.get_participant(identity)
