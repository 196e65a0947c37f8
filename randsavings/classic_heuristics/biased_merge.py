#!/usr/bin/env python
# -*- coding: utf-8 -*-
###############################################################################
""" This file is a part of the randsavings vehicle routing heuristic and
provides the biased randomized route merge used to evaluate the savings of
joining two routes. The customers of both routes are rerouted from scratch
with a randomized nearest neighbour construction (a GRASP style biased greedy
choice) and the shortest of several such constructions is kept.

The bias parameter alfa in [0,1) selects the candidate at rank
floor(alfa*candidates) among the unrouted customers ordered by their distance
to the last routed node. alfa=0 is the plain nearest neighbour rule and larger
values pick progressively farther customers. Only the k:th nearest is needed on
each step so a partial selection (introselect via numpy.argpartition) is used
instead of sorting the candidates."""
###############################################################################

from logging import log, DEBUG

import numpy as np

from randsavings.routedata import RouteData
from randsavings.config import MERGE_TRIALS, BIAS_SWEEP

__author__ = "randsavings contributors"
__license__ = "MIT"
__status__ = "Development"


def select_kth_nearest(distances, k):
    """ Returns the position of the k:th smallest (zero based rank) of the
    distances without fully sorting them. For k=0 the first occurrence of the
    minimum is returned. """
    if k==0:
        return int(np.argmin(distances))
    return int(np.argpartition(distances, k)[k])

def trial_biases(trials, bias_sweep=False, rng=None):
    """ The alfa values to try. With bias_sweep the values are evenly spaced
    i/trials (the first trial is always the greedy alfa=0), otherwise they are
    drawn uniformly from [0,1) using the generator rng. """
    if bias_sweep:
        return [i/trials for i in range(trials)]
    if rng is None:
        rng = np.random.default_rng()
    return rng.random(trials).tolist()

def biased_merge_trial(route1, route2, D, alfa):
    """ Build a single merged route of the customers of route1 and route2
    starting from the depot and always appending the unrouted customer at the
    alfa biased distance rank from the last routed node.

    * route1 and route2 are disjoint RouteData objects.
    * D is the DistanceMatrix.
    * alfa is the bias in [0,1).

    The capacity of the merge is NOT checked here. The demand of the merged
    route is the sum of the demands of the two routes.
    """
    depot = route1.depot
    candidates = list(route1.customers)+list(route2.customers)
    candidate_idxs = D.indices_of(candidates)

    new_route = [depot]
    new_cost = 0.0
    prev = depot
    while candidates:
        distances = D.from_node(prev, candidate_idxs)
        k = min(int(alfa*len(candidates)), len(candidates)-1)
        pick = select_kth_nearest(distances, k)

        prev = candidates.pop(pick)
        new_route.append(prev)
        new_cost += distances[pick]
        candidate_idxs = np.delete(candidate_idxs, pick)

    new_cost += D.between(prev, depot)
    new_route.append(depot)

    return RouteData(new_route, float(new_cost), route1.demand+route2.demand)

def biased_randomized_merge(route1, route2, D, trials=MERGE_TRIALS,
                            bias_sweep=BIAS_SWEEP, rng=None):
    """ Merges two routes by trying biased_merge_trial with several alfa
    values (see trial_biases) and returns the shortest resulting route. On
    ties the first constructed route is kept.

    * rng is the numpy Generator for the random alfa values. Give each
       concurrently evaluated merge its own generator.
    """
    best_route = None
    for alfa in trial_biases(trials, bias_sweep, rng):
        merged = biased_merge_trial(route1, route2, D, alfa)
        if __debug__:
            log(DEBUG-2, "Trial with alfa=%.3f produced %s"%(alfa, merged))
        if best_route is None or merged.cost<best_route.cost:
            best_route = merged
    return best_route
