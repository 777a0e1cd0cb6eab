from __future__ import annotations

from cobalt.cli import main

raise SystemExit(main())
