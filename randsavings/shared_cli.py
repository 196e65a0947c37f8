# -*- coding: utf-8 -*-
###############################################################################
""" This file is a part of the randsavings vehicle routing heuristic and
provides the shared Command Line Interface (CLI) functionality: finding the
problem files, setting up logging, solving a problem with progress
indication, and printing the solution statistics."""
###############################################################################

import sys
from time import time
from os import path
from glob import glob
import logging

from natsort import natsorted
from tqdm import tqdm

from randsavings import cvrp_io
from randsavings import cvrp_ops
from randsavings.routedata import DistanceMatrix
from randsavings.util import is_better_sol
from randsavings.visualizers.export_dot import write_dot_file

def print_problem_information(problem, verbosity=0):
    nodes = problem.nodes
    C = problem.capacity_constraint
    print("NAME:", problem.name)
    print("SIZE:", len(nodes)-1)
    print("CAPACITY:", C)
    total_demand = sum(n.demand for n in nodes)
    if C and verbosity>0:
        print("TIGHTNESS LOWER BOUND K:", int(-(-total_demand//C)))
    if verbosity>2:
        print("NODES:", [tuple(n) for n in nodes], "\n")

def print_solution_statistics(routes, nodes, C, verbosity=-1):
    D = DistanceMatrix.from_nodes(nodes)
    cover_ok, capa_ok, cache_ok = cvrp_ops.check_solution_feasibility(
                                     routes, nodes, D, C, True)
    if verbosity>1:
        print("ALL SERVED:", cover_ok)
        print("IS C FEASIBLE:", capa_ok)
        print("ROUTE DATA CONSISTENT:", cache_ok)
    else:
        print("FEASIBLE:", cover_ok and capa_ok and cache_ok)

    print("N ROUTES:", len(routes))
    print("TOTAL DISTANCE: %.2f"%cvrp_ops.calculate_objective(routes))
    print("TOTAL DEMAND:", cvrp_ops.calculate_total_demand(routes))

    if verbosity>0:
        print("ROUTES:")
        print("No.\tLength\tLoad\tRoute")
        for i, route in enumerate(routes):
            print(i+1,
                  "%.2f"%route.cost,
                  route.demand,
                  [n.id for n in route.route], sep='\t')

class TqdmProgress:
    """ Progress callback for the savings loop. The bar advances by one on
    each accepted merge and the total is kept at merges done + the current
    number of merge candidates. """

    def __init__(self, desc=None):
        self.bar = tqdm(total=0, desc=desc, unit="merge", leave=False)

    def __call__(self, iteration, candidate_count):
        self.bar.total = iteration+candidate_count
        self.bar.update(iteration-self.bar.n)
        self.bar.refresh()

    def close(self):
        self.bar.close()

def solve_a_problem(problem, with_algorithm_function, best_of_n=1,
                    verbosity=-1, single=False, measure_time=False,
                    show_progress=True):
    """ Solve the problem (a cvrp_io.ProblemDefinition) with the algorithm
    in <with_algorithm_function> of the signature

        init_f(nodes, C, single, progress_callback)

    The algorithm is run <best_of_n> times and the shortest solution is
    returned. The runs are independent and the random biases differ between
    them. """

    if verbosity>=0:
        print_problem_information(problem, verbosity)

    best_sol = None
    best_f = float('inf')
    best_K = len(problem.nodes)
    interrupted = False
    for repeat_n in range(best_of_n):
        sol = None
        progress = TqdmProgress(problem.name) if show_progress else None
        start = time()
        try:
            sol = with_algorithm_function(problem.nodes,
                                          problem.capacity_constraint,
                                          single, progress)
        except KeyboardInterrupt as e:
            print ("WARNING: Solving was interrupted, returning "+
                   "intermediate solution", file=sys.stderr)
            interrupted = True
            if len(e.args)>0 and type(e.args[0]) is list:
                sol = e.args[0]
        finally:
            if progress:
                progress.close()
        elapsed = time()-start

        if sol:
            sol_f = cvrp_ops.calculate_objective(sol)
            sol_K = len(sol)
            if is_better_sol(best_f, best_K, sol_f, sol_K, False):
                best_sol = sol
                best_f = sol_f
                best_K = sol_K
            if best_of_n>1 and verbosity>=1:
                print("SOLUTION QUALITY %d of %d: %.2f"%
                      (repeat_n+1, best_of_n, best_f))
            if measure_time or verbosity>=1:
                print("SOLVED IN: %.2f s"%elapsed)

        if interrupted:
            break

    if verbosity>=0 and best_sol:
        print_solution_statistics(best_sol, problem.nodes,
                                  problem.capacity_constraint, verbosity)

    if interrupted:
        raise KeyboardInterrupt(best_sol)

    return best_sol

def read_and_solve_a_problem(problem_instance_path, with_algorithm_function,
                             best_of_n=1, verbosity=-1, single=False,
                             measure_time=False, show_progress=True,
                             capacity=None, dot_file_path=None,
                             opt_file_path=None):
    """ Read the problem instance from <problem_instance_path>, solve it with
    solve_a_problem, and optionally write the solution as a Graphviz graph
    and as a route file. <capacity> overrides the capacity of the file.
    If solving is interrupted, the intermediate solution is written before
    the KeyboardInterrupt is passed on. """
    problem = cvrp_io.read_TSPLIB_CVRP(problem_instance_path)
    if capacity is not None:
        problem = problem._replace(capacity_constraint=capacity)

    try:
        best_sol = solve_a_problem(problem, with_algorithm_function, best_of_n,
                                   verbosity, single, measure_time,
                                   show_progress)
    except KeyboardInterrupt as e:
        if len(e.args)>0 and type(e.args[0]) is list:
            _write_solution_files(problem, e.args[0], dot_file_path,
                                  opt_file_path)
        raise

    _write_solution_files(problem, best_sol, dot_file_path, opt_file_path)
    return best_sol

def _write_solution_files(problem, sol, dot_file_path, opt_file_path):
    if sol and dot_file_path:
        write_dot_file(problem.nodes, sol, dot_file_path, problem.name)
    if sol and opt_file_path:
        cvrp_io.write_OPT_file(opt_file_path, sol)

def get_a_problem_file_list(problem_paths):
    files_to_solve = []
    for problem_path in problem_paths:
        if path.isdir(problem_path):
            for in_fn in natsorted(glob(path.join(problem_path, "*.vrp"))):
                files_to_solve.append( in_fn )
        elif path.isfile(problem_path) and problem_path[-4:].lower()==".txt":
            with open(problem_path, 'r') as vrp_list_file:
                for line in vrp_list_file.readlines():
                    line = line.strip()
                    if path.isfile(line):
                        files_to_solve.append(line)
        elif path.isfile(problem_path) and problem_path[-4:].lower()==".vrp":
            files_to_solve.append( problem_path )
        else:
            print(problem_path, "is not a .vrp file, folder, or text file",
                  file=sys.stderr)
    return files_to_solve

def set_logger_level(level, logfile=None):
    #set the logger verbosity level
    if level>=0:
        logging.basicConfig(format="%(levelname)s:%(message)s",
                            level=logging.DEBUG-level,
                            stream=sys.stdout)
        for lvl in range(1,10):
            logging.addLevelName(lvl, "DEBUG")

        if logfile is not None:
            fileloghandler = logging.FileHandler(logfile)
            fileloghandler.setLevel(logging.DEBUG-level)
            fileloghandler.setFormatter( logging.Formatter("%(levelname)s:%(message)s") )
            logging.getLogger('').addHandler(fileloghandler)
