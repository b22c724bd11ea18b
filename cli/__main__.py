"""
CLI Module Main Entry Point

Allows running the enrichment lookup CLI without installing the console script:
    python -m cli resolve --input descriptors.yaml
"""

from . import main

if __name__ == '__main__':
    main()
