from __future__ import annotations

from nethunter_installer.main import main as core_main


def main(argv: list[str] | None = None) -> int:
    # Console entry point; all behaviour lives in the core CLI.
    return core_main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
