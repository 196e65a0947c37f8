#!/usr/bin/env python
################################################################################
# -*- coding: utf-8 -*-
""" Provides a main callable interface to the randomized savings heuristic.
Can solve TSPLIB formatted CVRP problems (coordinates and demands) and write
the resulting routes as a Graphviz graph.
"""

import sys
from argparse import ArgumentParser
from os import path

from randsavings import __version__
from randsavings import cvrp_io
from randsavings import shared_cli
from randsavings.classic_heuristics.randomized_savings import get_rs_algorithm
from randsavings.config import MERGE_TRIALS, WORKER_COUNT, RESULTS_DOT_FILE
from randsavings.config import DEFAULT_CAPACITY

__author__ = "randsavings contributors"
__license__ = "MIT"
__status__ = "Development"

################################################################################


def _ask_problem_file():
    print("Enter filename: ")
    return sys.stdin.readline().strip()

def main(overridden_args=None):
    ## 1. parse arguments

    parser = ArgumentParser(description="Solve .vrp problems with the randomized savings heuristic.")
    parser.add_argument('--version', action='version', version='%(prog)s '+__version__)
    parser.add_argument('-v', dest='verbosity', help="Set the verbosity level (to completely disable debug output, run this script with 'python -O')", type=int, default=-1)
    parser.add_argument('-l', dest='logfile', help="Store the debug output also to this file")
    parser.add_argument('-n', dest='best_of_n', help="Run the algorithm this many times and keep only the best solution", type=int, default=1)
    parser.add_argument('-T', dest='trials', help="Biased merge trials per route pair (default %d)"%MERGE_TRIALS, type=int, default=MERGE_TRIALS)
    parser.add_argument('-s', dest='bias_sweep', help="Sweep the bias deterministically instead of drawing it at random", action="store_true")
    parser.add_argument('-w', dest='workers', help="Number of worker processes (default: all cores, 1 to disable parallel evaluation)", type=int, default=WORKER_COUNT)
    parser.add_argument('-r', dest='seed', help="Seed for the random biases", type=int)
    parser.add_argument('-C', dest='capacity', help="Override the vehicle capacity of the problem", type=int)
    parser.add_argument('-1', dest='use_single_iteration', help="Use the plain greedy (single alfa=0 trial) merge", action="store_true")
    parser.add_argument('-o', dest='dot_file', help="Write the solution as a Graphviz graph to this file (default %s)"%RESULTS_DOT_FILE, default=RESULTS_DOT_FILE)
    parser.add_argument('--opt', dest='opt_file', help="Write the solution routes to this file")
    parser.add_argument('-t', dest='print_elapsed_time', help="Print elapsed wall time for each solution attempt", action="store_true")
    parser.add_argument('--no-progress', dest='show_progress', help="Do not show the progress bar", action="store_false")
    parser.add_argument("problem_file", help="a path of a .vrp problem file, a directory containing .vrp files, a text file of paths to .vrp files, or N (integer) to generate a random problem. Asked if not given.", nargs='*')

    app_args = parser.parse_args(overridden_args)

    problem_paths = app_args.problem_file
    if not problem_paths:
        problem_paths = [_ask_problem_file()]

    # verbosity
    if app_args.verbosity >= 0:
        shared_cli.set_logger_level(app_args.verbosity, app_args.logfile)
    # print at least the route table
    output_verbosity = max(app_args.verbosity, 1)

    algo_name, algo_desc, algo_f = get_rs_algorithm(
        app_args.trials, app_args.bias_sweep, app_args.workers, app_args.seed)

    ## 2. solve
    solutions = []
    try:
        for problem_path in problem_paths:
            if problem_path.isdigit():
                C = app_args.capacity or DEFAULT_CAPACITY
                problem = cvrp_io.generate_CVRP(int(problem_path), C, 20, 5)
                print("Solve", problem.name, "with", algo_name)
                sol = shared_cli.solve_a_problem(
                    problem, algo_f, app_args.best_of_n, output_verbosity,
                    app_args.use_single_iteration, app_args.print_elapsed_time,
                    app_args.show_progress)
                solutions.append(sol)
                continue

            files_to_solve = shared_cli.get_a_problem_file_list([problem_path])
            if not files_to_solve:
                print("Provide at least one .vrp file to solve", file=sys.stderr)
            for pfn in files_to_solve:
                print("Solve", path.basename(pfn), "with", algo_name)
                sol = shared_cli.read_and_solve_a_problem(
                    pfn, algo_f, app_args.best_of_n, output_verbosity,
                    app_args.use_single_iteration, app_args.print_elapsed_time,
                    app_args.show_progress, app_args.capacity,
                    app_args.dot_file, app_args.opt_file)
                solutions.append(sol)
    except KeyboardInterrupt:
        print("WARNING: Interrupted solving with %s (%s)"%(algo_name, algo_desc),
              file=sys.stderr)
    sys.stdout.flush()
    sys.stderr.flush()
    return solutions

if __name__=="__main__":
    main()
