import mimetypes
from pathlib import Path
from veganscan.orchestrator.contracts import EncodedImage, UploadedFile
from veganscan.orchestrator.formats import PNG, is_supported
from veganscan.orchestrator import errors

# missing from the stdlib table before 3.11 when /etc/mime.types is absent
mimetypes.add_type("image/webp", ".webp")


def ingest_file(file: UploadedFile, codec) -> EncodedImage:
    """Validate an upload and re-encode it as PNG at its natural size."""
    declared = (file.content_type or "").strip().lower()
    if not declared.startswith("image/"):
        raise errors.InvalidFileType()
    if not is_supported(declared):
        raise errors.UnsupportedFormat()

    raster = codec.decode(file.data, declared)
    return EncodedImage(data=codec.encode_png(raster), mime_type=PNG)


def file_from_path(path: str | Path) -> UploadedFile:
    """Build an UploadedFile whose declared type comes from the file extension."""
    p = Path(path)
    content_type, _ = mimetypes.guess_type(p.name)
    return UploadedFile(name=p.name, content_type=content_type or "application/octet-stream", data=p.read_bytes())
