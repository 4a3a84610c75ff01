"""ID and value generators (e.g. CUID)."""

from cuid2 import cuid_wrapper

from byki_admin.shared.utils.datetime import utc_now

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_message_id() -> str:
    """Return a ticket message id in the mobile app's ``msg_<epoch ms>`` format."""
    return f"msg_{int(utc_now().timestamp() * 1000)}"
