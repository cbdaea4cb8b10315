from cyclotron.cli import main

raise SystemExit(main())
