from billsplit.cli import main

raise SystemExit(main())
