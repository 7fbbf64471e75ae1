from mailnotifier.cli.main import main

raise SystemExit(main())
