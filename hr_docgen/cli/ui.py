"""
CLI Entry Point: hr-docgen-ui

Launches the streamlit form UI.
"""

import sys
from pathlib import Path

from streamlit.web import cli as stcli


def main() -> None:
    app_path = Path(__file__).resolve().parent.parent / "ui" / "app.py"
    if not app_path.exists():
        print(f"Error: Could not find UI app at {app_path}")
        sys.exit(1)

    # Extra arguments are passed through to streamlit.
    sys.argv = ["streamlit", "run", str(app_path)] + sys.argv[1:]
    sys.exit(stcli.main())


if __name__ == "__main__":
    main()
