"""Input/output utilities for trajectories, atoms and run parameters."""

import numpy as np
import h5py
from typing import Any, Dict, List, Optional, Sequence
import json
from pathlib import Path


def save_records(
    filename: str,
    records: np.ndarray,
    delimiter: str = " ",
    header: str = ""
):
    """
    Save one whitespace-separated line per record.

    Args:
        filename: Output filename
        records: (n_records, n_columns) array
        delimiter: Column separator
        header: Optional comment line
    """
    records = np.atleast_2d(np.asarray(records, dtype=float))
    np.savetxt(filename, records, fmt="%.17g", delimiter=delimiter, header=header)


def load_records(filename: str) -> np.ndarray:
    """Load records written by ``save_records``."""
    return np.atleast_2d(np.loadtxt(filename))


def save_trajectory(
    filename: str,
    times: np.ndarray,
    records: np.ndarray,
    columns: Sequence[str],
    metadata: Optional[Dict[str, Any]] = None
):
    """
    Save a trajectory to HDF5.

    Args:
        filename: Output filename
        times: Time of each record
        records: (n_records, n_columns) array of observables
        columns: Name of each column
        metadata: Optional scalar attributes
    """
    with h5py.File(filename, 'w') as f:
        f.create_dataset('times', data=np.asarray(times, dtype=float))
        f.create_dataset('records', data=np.asarray(records, dtype=float))
        f.attrs['columns'] = json.dumps(list(columns))
        if metadata is not None:
            for key, value in metadata.items():
                f.attrs[key] = value


def load_trajectory(filename: str) -> Dict[str, Any]:
    """
    Load a trajectory saved with ``save_trajectory``.

    Returns:
        Dictionary with times, records, columns and any metadata
    """
    with h5py.File(filename, 'r') as f:
        results = {
            'times': f['times'][:],
            'records': f['records'][:],
        }
        for key, value in f.attrs.items():
            if key == 'columns':
                results['columns'] = json.loads(value)
            else:
                results[key] = value.item() if isinstance(value, np.generic) else value

    return results


def save_json(filename: str, data: Any):
    """
    Save parameters to JSON.

    Objects providing ``to_dict`` are converted, as are numpy arrays and scalars.
    """
    def default(obj):
        if hasattr(obj, 'to_dict'):
            return obj.to_dict()
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.generic):
            return obj.item()
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

    with open(filename, 'w') as f:
        json.dump(data, f, indent=2, default=default)


def load_json(filename: str) -> Any:
    with open(filename, 'r') as f:
        return json.load(f)


def save_atoms(filename: str, atoms: Sequence):
    """Save an atom collection to JSON."""
    save_json(filename, [atom.to_dict() for atom in atoms])


def load_atoms(filename: str) -> List:
    """Load an atom collection saved with ``save_atoms``."""
    from ..core.atom import Atom

    filepath = Path(filename)
    if not filepath.exists():
        raise ValueError(f"Atom file not found: {filename}")

    return [Atom.from_dict(entry) for entry in load_json(filename)]


def export_to_ase(atoms: Sequence, cell: Optional[np.ndarray] = None, pbc: bool = False):
    """
    Export positions and magnetic moments to an ASE Atoms object.

    Args:
        atoms: Atom collection
        cell: Optional 3x3 cell
        pbc: Periodicity flags

    Returns:
        ASE Atoms object with magnetic moments g·S
    """
    from ase import Atoms
    from ase.data import chemical_symbols

    symbols = [atom.name if atom.name in chemical_symbols else 'X' for atom in atoms]
    structure = Atoms(
        symbols=symbols,
        positions=[atom.position for atom in atoms],
        cell=cell,
        pbc=pbc
    )
    structure.set_initial_magnetic_moments([atom.magnetic_moment() for atom in atoms])

    return structure
