from dryconomy.simulation.runner import run_simulation, main

__all__ = ['run_simulation', 'main']
