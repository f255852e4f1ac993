import os
from pathlib import Path


def get_configfile() -> Path | None:
    # Priority: ENV > default file in current working directory
    raw = os.getenv("PULSEWIRECONFIG")

    if raw is None:
        file = Path.cwd() / "pulsewire.yaml"
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Fix or unset the PULSEWIRECONFIG environment variable\n"
            "  - Or place a 'pulsewire.yaml' file in the current working directory."
        )

    return file
