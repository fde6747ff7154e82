"""Shared fixtures: an orchestrator wired to in-memory collaborators."""

from dataclasses import dataclass

import pytest

from provisioner.contracts import ProjectRecord
from provisioner.orchestrator import (
    DeliveryChainBuilder,
    IdentityPolicyChecker,
    ProvisioningOrchestrator,
    UpdateReconciler,
)
from provisioner.storage import InMemoryProjectStorage
from tests.mocks.collaborators import (
    CallLog,
    MockBugtracker,
    MockCollaboration,
    MockIdentity,
    MockJobRunner,
    MockJobStore,
    MockNotifier,
    MockSCM,
    MockSessions,
)

AUXILIARY_REPOSITORIES = ["occonfig-artifacts", "design"]


@dataclass
class Harness:
    log: CallLog
    bugtracker: MockBugtracker
    collaboration: MockCollaboration
    scm: MockSCM
    jobs: MockJobRunner
    identity: MockIdentity
    notifier: MockNotifier
    job_store: MockJobStore
    sessions: MockSessions
    storage: InMemoryProjectStorage
    delivery_chain: DeliveryChainBuilder
    orchestrator: ProvisioningOrchestrator

    @property
    def calls(self) -> list[str]:
        return self.log.calls


def build_harness(upgrade_allowed: bool = False) -> Harness:
    log = CallLog()
    job_store = MockJobStore()
    bugtracker = MockBugtracker(log)
    collaboration = MockCollaboration(log)
    scm = MockSCM(log)
    jobs = MockJobRunner(log, job_store)
    identity = MockIdentity(log)
    notifier = MockNotifier(log)
    sessions = MockSessions()
    storage = InMemoryProjectStorage()

    delivery_chain = DeliveryChainBuilder(
        scm=scm,
        jobs=jobs,
        bugtracker=bugtracker,
        auxiliary_repositories=AUXILIARY_REPOSITORIES,
    )
    orchestrator = ProvisioningOrchestrator(
        bugtracker=bugtracker,
        collaboration=collaboration,
        storage=storage,
        notifier=notifier,
        jobs=jobs,
        job_store=job_store,
        sessions=sessions,
        identity_checker=IdentityPolicyChecker(identity),
        delivery_chain=delivery_chain,
        reconciler=UpdateReconciler(delivery_chain, upgrade_allowed),
        template_keys=["default", "kanban"],
    )
    return Harness(
        log=log,
        bugtracker=bugtracker,
        collaboration=collaboration,
        scm=scm,
        jobs=jobs,
        identity=identity,
        notifier=notifier,
        job_store=job_store,
        sessions=sessions,
        storage=storage,
        delivery_chain=delivery_chain,
        orchestrator=orchestrator,
    )


@pytest.fixture
def harness() -> Harness:
    return build_harness()


@pytest.fixture
def upgrade_harness() -> Harness:
    return build_harness(upgrade_allowed=True)


@pytest.fixture
def make_project():
    def _make(**overrides) -> ProjectRecord:
        data = {
            "key": "abc",
            "name": "Demo",
            "description": "Demo project",
            "bugtracker_space": True,
            "platform_runtime": False,
        }
        data.update(overrides)
        return ProjectRecord(**data)

    return _make
