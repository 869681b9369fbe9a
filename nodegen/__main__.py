"""Allow ``python -m nodegen`` to open the project selector."""

from nodegen.selector import main

if __name__ == "__main__":
    main()
