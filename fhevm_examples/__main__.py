"""Allow ``python -m fhevm_examples``."""

from fhevm_examples.pipeline import main

if __name__ == "__main__":
    main()
