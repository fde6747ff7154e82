from .base import (
    BugtrackerAdapter,
    CollaborationAdapter,
    IdentityPolicyAdapter,
    JobDefinitionStore,
    JobExecutionAdapter,
    Notifier,
    ProjectStorage,
    SCMAdapter,
    SessionProvider,
)
from .bitbucket import BitbucketAdapter
from .confluence import ConfluenceAdapter
from .crowd import CrowdIdentityAdapter
from .http import ClientRegistry, ServiceAccountSessionProvider
from .jira import JiraAdapter
from .rundeck import RundeckAdapter, RundeckJobStore

__all__ = [
    "BitbucketAdapter",
    "BugtrackerAdapter",
    "ClientRegistry",
    "CollaborationAdapter",
    "ConfluenceAdapter",
    "CrowdIdentityAdapter",
    "IdentityPolicyAdapter",
    "JiraAdapter",
    "JobDefinitionStore",
    "JobExecutionAdapter",
    "Notifier",
    "ProjectStorage",
    "RundeckAdapter",
    "RundeckJobStore",
    "SCMAdapter",
    "ServiceAccountSessionProvider",
    "SessionProvider",
]
