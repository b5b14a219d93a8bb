"""
Android runtime permission names used by the app.

Android 13 (API level 33) replaced READ_EXTERNAL_STORAGE with
per-media permissions for reading photos.
"""

CAMERA = "android.permission.CAMERA"
READ_EXTERNAL_STORAGE = "android.permission.READ_EXTERNAL_STORAGE"
READ_MEDIA_IMAGES = "android.permission.READ_MEDIA_IMAGES"

MEDIA_PERMISSIONS_API_LEVEL = 33


def camera_permissions() -> list[str]:
    return [CAMERA]


def gallery_permissions(api_level: int) -> list[str]:
    """Permissions needed to browse photos on the given Android API level."""
    if api_level >= MEDIA_PERMISSIONS_API_LEVEL:
        return [READ_MEDIA_IMAGES]
    return [READ_EXTERNAL_STORAGE]
