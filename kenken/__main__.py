# python -m kenken starts the desktop client
import sys
from .ui.main_window import main

if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print(f"KenKen exited with an error: {e}", file=sys.stderr)
        sys.exit(1)
