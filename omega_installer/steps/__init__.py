from .step_10_check_prerequisites import CheckPrerequisitesStep
from .step_20_build import BuildStep
from .step_30_install_layout import InstallLayoutStep
from .step_40_provision_config import ProvisionConfigStep
from .step_50_verify import VerifyStep

__all__ = [
    "CheckPrerequisitesStep",
    "BuildStep",
    "InstallLayoutStep",
    "ProvisionConfigStep",
    "VerifyStep",
]
