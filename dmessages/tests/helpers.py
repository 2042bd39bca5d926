from django.core.files.uploadedfile import SimpleUploadedFile

# A 1x1 transparent PNG
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"
    b"\x00\x00\x00\nIDATx\x9cc\x00\x01\x00\x00\x05\x00\x01\r\n-\xb4\x00\x00\x00\x00IEND\xaeB`\x82"
)

TEST_MEDIA_DIR = "test_media"


def png_upload(name="photo.png"):
    return SimpleUploadedFile(name, PNG_BYTES, "image/png")


def text_upload(name="notes.txt", content=b"Viewing at 5pm"):
    return SimpleUploadedFile(name, content, "text/plain")
