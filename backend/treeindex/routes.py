# backend/treeindex/routes.py
import threading
import time

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from treeindex.engine import Engine
from treeindex.errors import TreeIndexError, TreeNotFoundError
from treeindex.io_counters import reset_counters, get_counters, start_timing, stop_timing

eng = Engine()
router = APIRouter()
# the trees are not thread-safe and sync endpoints run in a threadpool
_lock = threading.Lock()


class CommandRequest(BaseModel):
    command: str = Field(..., description="Comando completo: CREATE/DROP TREE, INSERT, DELETE, SELECT")


@router.post("/command")
def execute_command(req: CommandRequest):
    t0 = time.perf_counter()
    with _lock:
        try:
            reset_counters()
            start_timing()
            result = eng.execute(req.command)
        except TreeNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except TreeIndexError as e:
            raise HTTPException(status_code=400, detail=str(e))
        finally:
            stop_timing()
        result["_elapsed_ms"] = round((time.perf_counter() - t0) * 1000, 2)
        result["metrics"] = get_counters()
    return result


@router.get("/trees")
def list_trees():
    out = []
    with _lock:
        for name in eng.catalog.list_trees():
            tree = eng.catalog.get_tree(name)
            out.append({
                "name": name,
                "kind": eng.catalog.get_kind(name).value,
                "size": tree.size(),
                "height": tree.height(),
            })
    return {"trees": out}


@router.get("/trees/{name}")
def tree_snapshot(name: str):
    with _lock:
        try:
            return eng.snapshot(name)
        except TreeNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
