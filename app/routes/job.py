# ========================================
# app/routes/job.py
# ========================================

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from app.database import get_db, jobs_collection
from app.schemas.job import JobCreate, JobResponse, InsertResponse
from app.utils.mongo import (
    parse_object_id,
    serialize_document,
    serialize_documents,
    insert_ack,
)

router = APIRouter()


# ✅ 1. GET ALL JOBS, OPTIONALLY FOR ONE EMPLOYER
@router.get(
    "/jobs",
    response_model=List[JobResponse],
    response_model_exclude_unset=True
)
async def get_all_jobs(
    email: Optional[str] = Query(None, description="Only jobs posted by this HR email"),
    db=Depends(get_db)
):
    """Get all jobs, or only those whose hr_email matches `email`."""

    query = {}
    if email:
        query = {"hr_email": email}

    jobs = await jobs_collection(db).find(query).to_list(None)
    return serialize_documents(jobs)


# ✅ 2. GET SINGLE JOB
@router.get(
    "/jobs/{job_id}",
    response_model=Optional[JobResponse],
    response_model_exclude_unset=True
)
async def get_job_details(job_id: str, db=Depends(get_db)):
    """Get a job by id. An unknown id returns null, not 404."""

    job = await jobs_collection(db).find_one({"_id": parse_object_id(job_id, "job")})
    return serialize_document(job)


# ✅ 3. POST A JOB
@router.post("/jobs", response_model=InsertResponse)
async def create_job(job: JobCreate, db=Depends(get_db)):
    """Store the posted job as-is and return the insert acknowledgement."""

    new_job = job.model_dump(exclude_unset=True)
    result = await jobs_collection(db).insert_one(new_job)

    return insert_ack(result)
