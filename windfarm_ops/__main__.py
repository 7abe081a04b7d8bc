"""Allow running as: python -m windfarm_ops"""
import sys

from windfarm_ops.cli import main

sys.exit(main())
