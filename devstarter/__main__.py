from devstarter.pipeline import main

main()
