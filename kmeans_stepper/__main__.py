import sys

from kmeans_stepper.cli import main

sys.exit(main())
