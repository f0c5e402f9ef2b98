from .cli.commands import cli as main

if __name__ == '__main__':
    main()
