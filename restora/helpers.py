def format_file_size(size: int) -> str:
    """Human-readable byte count: "512 B", "1.5 KB", "2.0 MB"."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def download_name(file_name: str | None) -> str:
    """File name offered when saving a restored image."""
    return f"restored-{file_name or 'photo.png'}"
