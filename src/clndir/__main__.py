from clndir.cli import main

raise SystemExit(main())
