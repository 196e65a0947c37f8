#!/usr/bin/env python
# -*- coding: utf-8 -*-
###############################################################################
""" This file is a part of the randsavings vehicle routing heuristic and
provides an implementation of a randomized variant of the Clarke and Wright
(1964) parallel savings heuristic. Instead of joining route end points, the
saving of each capacity feasible route pair is evaluated by rerouting the
customers of both routes with the biased randomized merge (see
biased_merge.py). The best merge is accepted, the routes it makes redundant
are pruned, and the savings are recomputed until no merge shortens the
solution.

The savings of the route pairs are independent of each other and they are
evaluated in parallel with a process pool.

The script is callable and can be used as a standalone solver for TSPLIB
formatted CVRPs."""
###############################################################################

from logging import log, DEBUG
from collections import namedtuple
from concurrent.futures import ProcessPoolExecutor
from os import cpu_count

import numpy as np

from randsavings.routedata import RouteData, DistanceMatrix
from randsavings.cvrp_ops import validate_nodes
from randsavings.classic_heuristics.biased_merge import biased_randomized_merge
from randsavings.config import MERGE_TRIALS, BIAS_SWEEP, WORKER_COUNT
from randsavings.config import CAPACITY_EPSILON as C_EPS

__author__ = "randsavings contributors"
__license__ = "MIT"
__status__ = "Development"


Saving = namedtuple('Saving', ['value', 'route'])
Saving.__doc__ = """ The integer (truncated) distance saved by replacing two
routes with the merged route. """


def create_initial_routes(nodes, D):
    """ One depot->customer->depot route per customer. The first node of
    nodes is the depot. """
    depot = nodes[0]
    routes = []
    for node in nodes[1:]:
        routes.append(RouteData((depot, node, depot),
                                D.between(depot, node)*2.0,
                                node.demand))
    return routes

def truncated_saving(route1, route2, merged_route):
    """ The saving of the merge with the fractional part discarded (not
    rounded), e.g. 4.9 -> 4 and -0.5 -> 0 """
    return int(route1.cost+route2.cost-merged_route.cost)

def feasible_route_pairs(routes, C):
    """ All index pairs (i,j), i<j, of routes that fit into one vehicle in
    ascending (i,j) order. """
    pairs = []
    for i in range(len(routes)):
        for j in range(i+1, len(routes)):
            if C and routes[i].demand+routes[j].demand-C_EPS>C:
                continue
            pairs.append((i,j))
    return pairs

def evaluate_pair_saving(route1, route2, D, trials, bias_sweep, seed_seq=None):
    """ Merge the two routes with the biased randomized merge and return the
    Saving candidate. seed_seq is a numpy SeedSequence for the random biases
    (ignored when sweeping the bias). """
    rng = None if bias_sweep else np.random.default_rng(seed_seq)
    merged_route = biased_randomized_merge(route1, route2, D, trials,
                                           bias_sweep, rng)
    return Saving(truncated_saving(route1, route2, merged_route), merged_route)


# The worker processes receive the distance matrix and the merge settings once
#  when the pool is started.
_worker_context = {}

def _init_worker(D, trials, bias_sweep):
    _worker_context['D'] = D
    _worker_context['trials'] = trials
    _worker_context['bias_sweep'] = bias_sweep

def _evaluate_pair_in_worker(task):
    route1, route2, seed_seq = task
    return evaluate_pair_saving(route1, route2, _worker_context['D'],
                                _worker_context['trials'],
                                _worker_context['bias_sweep'], seed_seq)

def calculate_savings(routes, D, C, trials=MERGE_TRIALS, bias_sweep=BIAS_SWEEP,
                      seed_seq=None, executor=None, workers=1):
    """ Computes the Saving candidate for each capacity feasible pair of the
    routes. The candidates are returned in the ascending (i,j) route pair
    order regardless of how they were evaluated.

    * executor is an optional ProcessPoolExecutor started with _init_worker
       (see randomized_savings_init). If None, the pairs are evaluated
       serially. workers is the size of the pool, used to chunk the pairs.
    * seed_seq is the numpy SeedSequence from which an independent child
       sequence is spawned for each route pair.
    """
    pairs = feasible_route_pairs(routes, C)
    if not pairs:
        return []

    if bias_sweep:
        seeds = [None]*len(pairs)
    else:
        if seed_seq is None:
            seed_seq = np.random.SeedSequence()
        seeds = seed_seq.spawn(len(pairs))

    tasks = [(routes[i], routes[j], s) for (i,j), s in zip(pairs, seeds)]
    if executor is None:
        return [evaluate_pair_saving(r1, r2, D, trials, bias_sweep, s)
                for r1, r2, s in tasks]

    chunksize = max(1, len(tasks)//(4*workers))
    return list(executor.map(_evaluate_pair_in_worker, tasks,
                             chunksize=chunksize))

def select_best_saving(savings):
    """ Returns the candidate with the strictly largest positive saving. On a
    tie the candidate that comes first (lowest route pair index) wins. None
    is returned if no candidate has a positive saving. """
    best_saving = None
    for saving in savings:
        if saving.value<=0:
            continue
        if best_saving is None or saving.value>best_saving.value:
            best_saving = saving
    return best_saving

def remove_dominated_routes(routes, merged_route):
    """ Removes (in place) every route whose nodes are all visited by the
    merged_route. Returns the number of removed routes. """
    removed = 0
    for i in range(len(routes)-1, -1, -1):
        if routes[i].is_dominated_by(merged_route):
            del routes[i]
            removed+=1
    return removed

def randomized_savings_init(nodes, C, trials=MERGE_TRIALS,
                            bias_sweep=BIAS_SWEEP, workers=WORKER_COUNT,
                            seed=None, progress_callback=None):
    """
    Randomized savings construction heuristic for capacitated vehicle routing
    problems with symmetric euclidian distances. Starts with one route per
    customer and repeatedly makes the merge with the largest saving, where the
    merged route (and thus the saving) is produced by the biased randomized
    merge of biased_merge.py. Stops when no feasible merge has a positive
    (integer truncated) saving.

    * nodes is a list of Node objects with the depot as the first node and
       contiguous ids 1..N.
    * C is the capacity constraint limit for the identical vehicles.
    * trials is the number of biased constructions tried for each merge.
    * bias_sweep makes the biases evenly spaced instead of random.
    * workers is the number of processes used to evaluate the savings (None
       uses all cores, 1 evaluates serially).
    * seed optionally seeds the random biases (None draws fresh entropy).
    * progress_callback is called as progress_callback(iteration,
       candidate_count) after each (re)computation of the savings.

    Returns the list of the RouteData objects of the solution.

    Clarke, G. and Wright, J. (1964). Scheduling of vehicles from a central
     depot to a number of delivery points. Operations Research, 12, 568-81.
    """
    validate_nodes(nodes, C)
    if trials<1:
        raise ValueError("At least one merge trial is needed")

    if workers is None:
        workers = cpu_count() or 1
    seed_seq = np.random.SeedSequence(seed)

    ## 1. distances and a route for each customer
    D = DistanceMatrix.from_nodes(nodes)
    routes = create_initial_routes(nodes, D)

    executor = None
    if workers>1 and len(routes)>2:
        executor = ProcessPoolExecutor(max_workers=workers,
                                       initializer=_init_worker,
                                       initargs=(D, trials, bias_sweep))
    try:
        ## 2. compute initial savings
        savings = calculate_savings(routes, D, C, trials, bias_sweep,
                                    seed_seq, executor, workers)
        iteration = 0
        if progress_callback:
            progress_callback(iteration, len(savings))

        ## 3. merge while it improves
        while savings:
            best_saving = select_best_saving(savings)
            if best_saving is None:
                break

            # routes is replaced only when the merge is complete so that an
            #  interrupt never sees a half updated solution
            merged_routes = list(routes)
            removed = remove_dominated_routes(merged_routes, best_saving.route)
            merged_routes.append(best_saving.route)
            routes = merged_routes
            iteration += 1

            if __debug__:
                log(DEBUG-1, "Accepted merge %d with saving %d replacing %d routes: %s"%
                             (iteration, best_saving.value, removed,
                              str(best_saving.route)))

            savings = calculate_savings(routes, D, C, trials, bias_sweep,
                                        seed_seq, executor, workers)
            if progress_callback:
                progress_callback(iteration, len(savings))
    except KeyboardInterrupt: # or SIGINT
        raise KeyboardInterrupt(list(routes))
    finally:
        if executor is not None:
            executor.shutdown(cancel_futures=True)

    if __debug__:
        log(DEBUG, "Converged after %d merges to %d routes (%.2f)"%
                   (iteration, len(routes), sum(r.cost for r in routes)))
    return routes

def greedy_savings_init(nodes, C):
    """ The plain greedy variant: a single alfa=0 (nearest neighbour) merge
    trial and serial evaluation of the savings. Fully deterministic. """
    return randomized_savings_init(nodes, C, trials=1, bias_sweep=True,
                                   workers=1)


# ---------------------------------------------------------------------
# Wrapper for the command line user interface (CLI)
def get_rs_algorithm(trials=MERGE_TRIALS, bias_sweep=BIAS_SWEEP,
                     workers=WORKER_COUNT, seed=None):
    algo_name = "RS"
    algo_desc = "Randomized (biased nearest neighbour merge) parallel savings algorithm"
    def call_init(nodes, C, single=False, progress_callback=None):
        if single:
            return greedy_savings_init(nodes, C)
        return randomized_savings_init(nodes, C, trials, bias_sweep,
                                       workers, seed, progress_callback)
    call_init.__doc__ = randomized_savings_init.__doc__
    return (algo_name, algo_desc, call_init)

if __name__=="__main__":
    from randsavings.RandSavings import main
    main()
