# app.py

import logging
import math

from flask import Flask, request, jsonify

from eadvfs.config import SchedulerConfig
from eadvfs.metrics import calculate_metrics
from eadvfs.power import FrequencyChoice, default_power_model
from eadvfs.scheduler import fixed_frequency, select_frequency, simulate

logger = logging.getLogger(__name__)

app = Flask(__name__)

POLICIES = {
    'eadvfs': select_frequency,
    'low': fixed_frequency(FrequencyChoice.LOW),
    'medium': fixed_frequency(FrequencyChoice.MEDIUM),
    'high': fixed_frequency(FrequencyChoice.HIGH),
}


def parse_processes(processes_data):
    """Rows are [label, arrival, burst]; labels are ignored and pids assigned in order."""
    if not processes_data:
        raise ValueError("No processes given.")
    jobs = []
    for p_data in processes_data:
        arrival = float(p_data[1])
        burst = float(p_data[2])
        if not (math.isfinite(arrival) and math.isfinite(burst)):
            raise ValueError(f"Arrival and burst must be finite, got {arrival}, {burst}.")
        if arrival < 0 or burst <= 0:
            raise ValueError(f"Arrival must be >= 0 and burst > 0, got {arrival}, {burst}.")
        jobs.append((arrival, burst))
    return jobs


def parse_request(data):
    """Pull the job list and tunables out of a request body."""
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object.")
    try:
        jobs = parse_processes(data.get('processes'))
    except (TypeError, ValueError, IndexError) as e:
        raise ValueError(f"Invalid process input (arrival, burst): {e}")
    return jobs, SchedulerConfig.from_mapping(data)


# --- The Homepage Route ---
@app.route('/')
def index():
    return jsonify(
        policies=sorted(POLICIES),
        config=SchedulerConfig().to_dict(),
        power_model=default_power_model().to_dict(),
    )


# --- The Central Simulation Route (Runs ONE policy) ---
@app.route('/simulate', methods=['POST'])
def run_simulation():
    data = request.get_json(silent=True)
    try:
        jobs, config = parse_request(data)
    except ValueError as e:
        return jsonify(error=str(e)), 400

    policy_name = data.get('policy', 'eadvfs')
    if not isinstance(policy_name, str) or policy_name not in POLICIES:
        return jsonify(error=f"Policy '{policy_name}' not supported."), 400

    run = simulate(jobs, default_power_model(), config, POLICIES[policy_name])
    logger.info("Simulated %d job(s) under '%s': %.6f J", len(jobs), policy_name, run.energy)

    return jsonify(
        results=[p.to_dict() for p in run.processes],
        gantt_timeline=run.gantt_timeline,
        metrics=calculate_metrics(run),
    )


# --- The Comparison Route (Runs EVERY policy) ---
@app.route('/compare', methods=['POST'])
def compare():
    data = request.get_json(silent=True)
    try:
        jobs, config = parse_request(data)
    except ValueError as e:
        return jsonify(error=str(e)), 400

    comparison_results = []
    for name, policy in POLICIES.items():
        # Fresh processes for every run
        run = simulate(jobs, default_power_model(), config, policy)
        metrics = calculate_metrics(run)
        comparison_results.append({
            'policy': name,
            'energy': metrics['energy'],
            'makespan': metrics['makespan'],
            'avg_tat': metrics['avg_tat'],
            'avg_wt': metrics['avg_wt'],
            'utilization': metrics['utilization'],
        })

    return jsonify(results=comparison_results)


if __name__ == '__main__':
    app.run(debug=True)
