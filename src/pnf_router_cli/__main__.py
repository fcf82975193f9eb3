"""Entry point for running the PNF Router CLI as a module.

This allows the package to be run with:
    python -m pnf_router_cli
"""

from __future__ import annotations

from pnf_router_cli import main

if __name__ == "__main__":
    main()
