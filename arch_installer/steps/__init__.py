from .step_10_disk_prep import DiskPrepStep
from .step_20_bootstrap import BootstrapStep
from .step_25_write_fstab import WriteFstabStep
from .step_30_hostname import HostnameStep
from .step_40_timezone import TimezoneStep
from .step_50_locale import LocaleStep
from .step_60_credentials import CredentialsStep
from .step_70_chroot_apply import ChrootApplyStep
from .step_90_finalize_reboot import FinalizeRebootStep

__all__ = [
    "DiskPrepStep",
    "BootstrapStep",
    "WriteFstabStep",
    "HostnameStep",
    "TimezoneStep",
    "LocaleStep",
    "CredentialsStep",
    "ChrootApplyStep",
    "FinalizeRebootStep",
]
