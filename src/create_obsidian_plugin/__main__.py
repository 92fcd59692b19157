from create_obsidian_plugin.cli.main import main

if __name__ == "__main__":
    main()
