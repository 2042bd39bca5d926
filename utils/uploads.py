import os
import secrets
import time


def attachment_storage_key(chat_id, filename):
    """
    Collision-resistant blob key for a chat attachment.

    ``chat_attachments/<chat_id>/<epoch_ms>_<random>.<ext>``; the extension of
    the original filename is kept so storage backends can infer the type.
    """
    ext = os.path.splitext(filename or "")[1].lower().lstrip(".")
    stamp = int(time.time() * 1000)
    name = f"{stamp}_{secrets.token_hex(6)}"
    if ext:
        name = f"{name}.{ext}"
    return os.path.join("chat_attachments", str(chat_id), name)


def attachment_type_for(content_type):
    content_type = (content_type or "").lower()
    if "image" in content_type:
        return "image"
    elif "video" in content_type:
        return "video"
    elif "audio" in content_type:
        return "audio"
    return "file"
