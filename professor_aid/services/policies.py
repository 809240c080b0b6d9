"""
Row-level access policies.

Every policy is a membership test: the row's owner column must belong to
the set of parent ids reachable from the caller's identity by walking the
ownership chain (identity -> profile -> turma). Rows outside that set are
not visible, so an unauthorized read looks exactly like a missing row.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Dict, FrozenSet, Type

from sqlalchemy import Select, false, literal, select
from sqlalchemy.orm import Session

from professor_aid.models import Atividade, Profile, Turma

logger = logging.getLogger(__name__)


class Operation(str, enum.Enum):
    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class TablePolicy:
    """Base policy: subclasses name the model, its owner column and the reachable set."""

    model: Type[Any]
    owner_attr: str
    operations: FrozenSet[Operation] = frozenset(Operation)

    def allows(self, operation: Operation) -> bool:
        return operation in self.operations

    @property
    def owner_column(self):
        return getattr(self.model, self.owner_attr)

    def reachable(self, identity_id: str) -> Select:
        raise NotImplementedError

    def predicate(self, identity_id: str):
        return self.owner_column.in_(self.reachable(identity_id))

    def check(self, db: Session, identity_id: str, row: Any) -> bool:
        owner = getattr(row, self.owner_attr, None)
        if owner is None:
            return False
        stmt = self.reachable(identity_id).where(self._reachable_key() == owner)
        return db.execute(stmt).first() is not None

    def _reachable_key(self):
        raise NotImplementedError


class ProfilePolicy(TablePolicy):
    model = Profile
    owner_attr = "user_id"
    # profiles go away only with their identity
    operations = frozenset({Operation.SELECT, Operation.INSERT, Operation.UPDATE})

    def reachable(self, identity_id):
        return select(literal(identity_id).label("user_id"))

    def predicate(self, identity_id):
        return Profile.user_id == identity_id

    def check(self, db, identity_id, row):
        return row.user_id is not None and row.user_id == identity_id


class TurmaPolicy(TablePolicy):
    model = Turma
    owner_attr = "professor_id"

    def reachable(self, identity_id):
        return select(Profile.id).where(Profile.user_id == identity_id)

    def _reachable_key(self):
        return Profile.id


class AtividadePolicy(TablePolicy):
    model = Atividade
    owner_attr = "turma_id"

    def reachable(self, identity_id):
        return (
            select(Turma.id)
            .join(Profile, Turma.professor_id == Profile.id)
            .where(Profile.user_id == identity_id)
        )

    def _reachable_key(self):
        return Turma.id


class PolicyEngine:
    """
    Evaluates table policies for a caller. Storage code asks the engine and
    never encodes ownership rules itself.
    """

    def __init__(self, policies=None):
        self._policies: Dict[Type[Any], TablePolicy] = {}
        for policy in policies or ():
            self.register(policy)

    def register(self, policy: TablePolicy) -> None:
        self._policies[policy.model] = policy

    def policy_for(self, model: Type[Any]) -> TablePolicy | None:
        return self._policies.get(model)

    def authorize(self, db: Session, identity_id: str | None, row: Any, operation: Operation) -> bool:
        policy = self.policy_for(type(row))
        if identity_id is None or policy is None or not policy.allows(operation):
            logger.debug("No %s policy on %s for %s", operation.value, type(row).__name__, identity_id)
            return False
        return policy.check(db, identity_id, row)

    def scope(self, query, model: Type[Any], identity_id: str | None, operation: Operation = Operation.SELECT):
        """Restricts a select() to the rows the caller may apply `operation` to."""
        policy = self.policy_for(model)
        if identity_id is None or policy is None or not policy.allows(operation):
            return query.where(false())
        return query.where(policy.predicate(identity_id))


def default_engine() -> PolicyEngine:
    return PolicyEngine([ProfilePolicy(), TurmaPolicy(), AtividadePolicy()])
