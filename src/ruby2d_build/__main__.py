from src.ruby2d_build.cli import main

main()
