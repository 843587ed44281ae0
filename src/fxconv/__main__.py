from fxconv.cli.main import main

raise SystemExit(main())
