from colonytasks.cli import main

raise SystemExit(main())
