from kickoff.cli import main

raise SystemExit(main())
