import codecs

ACCEPTED_MEDIA_TYPE = "text/plain"


class UnsupportedTranscriptFile(ValueError):
    pass


def decode_transcript(data: bytes, content_type: str | None) -> str:
    """Decode an uploaded transcript file.

    Only plain-text uploads are accepted. Bytes are read as UTF-8 with
    invalid sequences replaced, and a leading BOM is dropped.
    """
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    if media_type != ACCEPTED_MEDIA_TYPE:
        raise UnsupportedTranscriptFile(
            f"Unsupported file type '{media_type or 'unknown'}'. "
            "Please upload a plain text (.txt) file."
        )
    if data.startswith(codecs.BOM_UTF8):
        data = data[len(codecs.BOM_UTF8):]
    return data.decode("utf-8", errors="replace")
