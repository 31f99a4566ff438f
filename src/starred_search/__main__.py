"""Allow ``python -m starred_search``."""

from starred_search.cli import main


raise SystemExit(main())
