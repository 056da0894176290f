from .step_10_download_dotfiles import DownloadDotfilesStep
from .step_20_install_homebrew import InstallHomebrewStep
from .step_30_link_dotfiles import LinkDotfilesStep
from .step_40_git_identity import GitIdentityStep
from .step_50_ssh_key import SSHKeyStep
from .step_60_vscode_extensions import VSCodeExtensionsStep

__all__ = [
    "DownloadDotfilesStep",
    "InstallHomebrewStep",
    "LinkDotfilesStep",
    "GitIdentityStep",
    "SSHKeyStep",
    "VSCodeExtensionsStep",
]
