import sys

from car_race_simulator.cli import main

sys.exit(main())
