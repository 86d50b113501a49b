from quote_quiz.cli import main

raise SystemExit(main())
