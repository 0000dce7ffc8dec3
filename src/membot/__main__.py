from membot.cli.main import main

main()
