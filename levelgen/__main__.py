from levelgen.cli import main

raise SystemExit(main())
