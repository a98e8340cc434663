from fastapi import Depends, FastAPI

from planit.api.routes import products
from planit.api.routes.products import get_dataset
from planit.dataset import Dataset
from planit.stats import compute_dataset_stats

app = FastAPI(title="PlanIt Green Scoring API")

app.include_router(products.router)


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/stats")
def stats(ds: Dataset = Depends(get_dataset)):
    s = compute_dataset_stats(list(ds.attributes.values()), ds.basics)
    return s.model_dump()
