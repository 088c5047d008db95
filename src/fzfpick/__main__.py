from fzfpick.cli import main

raise SystemExit(main())
