from svc_files.cli import main

main()
