from delivery_sync.cli import main

raise SystemExit(main())
