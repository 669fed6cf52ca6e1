# flake8: noqa

from constrained_ik.models.sample_arm import SampleArm
