from openclaw_installer.app import main

main()
