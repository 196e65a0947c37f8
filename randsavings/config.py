# -*- coding: utf-8 -*-
"""
Tunables shared by the randomized savings solver, the I/O helpers and the
command line interface.
"""

COST_EPSILON = 1e-10
CAPACITY_EPSILON = 1e-10

# used when the instance file does not define CAPACITY
DEFAULT_CAPACITY = 100

# how many biased randomized constructions are tried per route pair merge
MERGE_TRIALS = 10

# False: draw alfa uniformly from [0,1) on each trial
# True: sweep alfa deterministically as i/MERGE_TRIALS, i=0..MERGE_TRIALS-1
BIAS_SWEEP = False

# size of the process pool that evaluates the route pair savings,
#  None uses all cores and 1 evaluates them serially in the calling process
WORKER_COUNT = None

RESULTS_DOT_FILE = "results.dot"
