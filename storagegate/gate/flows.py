"""Selection of the OS grant flow for a platform tier"""

from enum import Enum

from storagegate.platform.tier import ANDROID_R


class FlowKind(str, Enum):
    """OS mechanism used to obtain the storage grant."""
    SETTINGS_SCREEN = "settings_screen"
    RUNTIME_PROMPT = "runtime_prompt"


# Reserved identifier for the gate's runtime permission request
PERMISSION_REQUEST_CODE = 3333

SETTINGS_ACTION = "android.settings.MANAGE_APP_ALL_FILES_ACCESS_PERMISSION"

READ_EXTERNAL_STORAGE = "android.permission.READ_EXTERNAL_STORAGE"
WRITE_EXTERNAL_STORAGE = "android.permission.WRITE_EXTERNAL_STORAGE"
MANAGE_EXTERNAL_STORAGE = "android.permission.MANAGE_EXTERNAL_STORAGE"

LEGACY_STORAGE_PERMISSIONS = (READ_EXTERNAL_STORAGE, WRITE_EXTERNAL_STORAGE)


def select_flow(tier: int) -> FlowKind:
    """Pick the grant flow for a platform tier.

    From the tier that deprecated the legacy permissions onward, only the
    settings screen is used, even where the legacy strings could still be
    requested.
    """
    if tier >= ANDROID_R:
        return FlowKind.SETTINGS_SCREEN
    return FlowKind.RUNTIME_PROMPT


def runtime_permissions(tier: int) -> tuple[str, ...]:
    """Ordered permission names for the runtime prompt on this tier."""
    if tier >= ANDROID_R:
        return (MANAGE_EXTERNAL_STORAGE,)
    return LEGACY_STORAGE_PERMISSIONS


def settings_target(package_name: str) -> str:
    """Address of the settings screen dedicated to this application."""
    if not package_name:
        raise ValueError("package_name must not be empty")
    return f"package:{package_name}"
