import sys

from .cli.crop_image import main

sys.exit(main())
