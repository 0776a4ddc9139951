# metrics.py

# --- METRICS CALCULATIONS ---

def calculate_metrics(run):
    """Turnaround, waiting, makespan, energy and utilization for a finished run."""
    eps = run.config.epsilon
    completed = [p for p in run.processes if p.is_complete(eps) and p.ct is not None]

    metrics = {
        'jobs': len(run.processes),
        'completed': len(completed),
        'avg_tat': 0.0,
        'avg_wt': 0.0,
        'avg_rt': 0.0,
        'makespan': 0.0,
        'energy': run.energy,
        'idle_energy': run.idle_energy,
        'busy_time': run.busy_time,
        'utilization': 0.0,
        'throughput': 0.0,
        'stopped_by_horizon': run.stopped_by_horizon,
        'stalled': run.stalled,
    }
    if not completed:
        return metrics

    metrics['avg_tat'] = sum(p.tat for p in completed) / len(completed)
    metrics['avg_wt'] = sum(p.wt for p in completed) / len(completed)
    metrics['avg_rt'] = sum(p.rt for p in completed) / len(completed)
    makespan = max(p.ct for p in completed)
    metrics['makespan'] = makespan

    # An early stop leaves work unfinished, so measure against the clock instead
    elapsed = run.clock if run.stopped_by_horizon or run.stalled else makespan
    if elapsed > 0:
        metrics['utilization'] = run.busy_time / elapsed * 100
        metrics['throughput'] = len(completed) / (elapsed / 1000.0)
    return metrics


def format_gantt(gantt_timeline):
    # Halves round up, not to even
    return ' '.join(f"[P{block['pid']}:{int(block['end'] - block['start'] + 0.5)}ms]"
                    for block in gantt_timeline)


def _fmt(value):
    return '-' if value is None else f"{value:.3f}"


def format_report(run, metrics=None):
    metrics = metrics or calculate_metrics(run)
    lines = [
        "===== EADVFS Simulation Results =====",
        f"Processes: {metrics['jobs']}",
    ]
    if metrics['stopped_by_horizon']:
        lines.append(f"Stopped at horizon t={run.clock:.3f} ms: "
                     f"{metrics['jobs'] - metrics['completed']} process(es) unfinished (partial results)")
    if metrics['stalled']:
        lines.append(f"Stalled at t={run.clock:.3f} ms: "
                     f"{metrics['jobs'] - metrics['completed']} process(es) can never run (partial results)")
    lines += [
        f"Avg Turnaround (ms): {metrics['avg_tat']:.3f}",
        f"Avg Waiting (ms): {metrics['avg_wt']:.3f}",
        f"Makespan (ms): {metrics['makespan']:.3f}",
        f"Total Energy (J): {metrics['energy']:.3f}",
        f"CPU Utilization (%): {metrics['utilization']:.3f}",
        "",
        "Gantt chart (pid:duration_ms):",
        format_gantt(run.gantt_timeline),
        "",
        "Detailed per-process:",
    ]
    for p in run.processes:
        lines.append(f"P{p.pid} arrival={p.at:.3f} burst={p.bt:.3f} start={_fmt(p.st)} finish={_fmt(p.ct)}")
    return '\n'.join(lines)
