from dreamdeploy.cli import main

main()
