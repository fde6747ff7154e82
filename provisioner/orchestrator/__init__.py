from .delivery_chain import DeliveryChainBuilder
from .identity import IdentityPolicyChecker
from .reconciler import UpdateReconciler
from .service import ProvisioningOrchestrator

__all__ = [
    "DeliveryChainBuilder",
    "IdentityPolicyChecker",
    "ProvisioningOrchestrator",
    "UpdateReconciler",
]
