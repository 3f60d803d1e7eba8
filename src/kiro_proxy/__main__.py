from kiro_proxy.core.cli import main

main()
