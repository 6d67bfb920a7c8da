"""Package entry point for ``python -m script_helper``.

RULES:
- ``--serve`` starts the HTTP API (uvicorn)
- Without ``--serve``, falls through to the CLI
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from script_helper.server.app import run_api
        run_api()
    else:
        from script_helper.cli import main
        main()
