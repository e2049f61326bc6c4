from .comments import (
    create_comment,
    delete_comment,
    get_comment_by_id,
    list_comments,
    update_comment,
)
from .institutions import (
    create_institution,
    delete_institution,
    get_institution_by_id,
    get_institution_by_name,
    list_institutions,
    update_institution,
)
from .lookups import (
    find_or_create_district,
    find_or_create_institution,
    find_or_create_position,
)
from .nominees import (
    create_nominee,
    delete_nominee,
    get_nominee_by_id,
    list_nominees,
    update_nominee,
)
from .ratings import (
    RatingTarget,
    create_rating,
    create_rating_category,
    delete_rating,
    delete_rating_category,
    get_rating_by_id,
    get_rating_category_by_id,
    get_score_summary,
    list_rating_categories,
    list_ratings,
    update_rating,
    update_rating_category,
)
from .reference import (
    create_department,
    create_district,
    create_impact_area,
    create_position,
    delete_department,
    delete_district,
    delete_impact_area,
    delete_position,
    get_department_by_id,
    get_department_by_name,
    get_district_by_id,
    get_district_by_name,
    get_impact_area_by_id,
    get_position_by_id,
    get_position_by_name,
    list_departments,
    list_districts,
    list_impact_areas,
    list_positions,
    update_department,
    update_district,
    update_impact_area,
    update_position,
)
from .sessions import create_session, delete_session, get_session_user_id
from .users import (
    count_active_admins,
    count_users,
    create_user,
    delete_user,
    get_user_by_email,
    get_user_by_id,
    list_users,
    update_user,
    update_user_password,
)

__all__ = [name for name in globals() if not name.startswith("_")]
