import pytest
from datetime import datetime, timedelta
from app.features.user.crud import UserCRUD
from app.features.user.schemas import UserCreate, UserUpdate, UserParams
from app.utils.timezone import TimezoneUtils


class TestUserCRUD:
    """Тесты CRUD операций для пользователей"""

    def test_get_user_existing(self, db_session, make_user, make_photo):
        """Тест получения пользователя вместе с фото"""
        user = make_user()
        make_photo(user, is_main=True)
        crud = UserCRUD(db_session)

        found = crud.get_user(user.id)

        assert found is not None
        assert found.id == user.id
        assert len(found.photos) == 1
        assert found.photo_url == found.photos[0].url

    def test_get_user_not_existing(self, db_session):
        crud = UserCRUD(db_session)

        assert crud.get_user(999999) is None

    def test_create_user_success(self, db_session, sample_user_data):
        crud = UserCRUD(db_session)

        user = crud.create_user(UserCreate(**sample_user_data))

        assert user.id is not None
        assert user.username == sample_user_data["username"]
        assert user.gender == "female"
        assert user.created is not None
        assert user.last_active is not None

    def test_create_user_duplicate_username(self, db_session, sample_user_data):
        """Тест создания пользователя с занятым username"""
        crud = UserCRUD(db_session)
        crud.create_user(UserCreate(**sample_user_data))

        with pytest.raises(Exception):  # IntegrityError
            crud.create_user(UserCreate(**sample_user_data))

    def test_update_user_partial(self, db_session, make_user):
        """Тест частичного обновления профиля"""
        user = make_user(city="Казань", introduction="Старое описание")
        crud = UserCRUD(db_session)

        updated = crud.update_user(user.id, UserUpdate(introduction="Новое описание"))

        assert updated.introduction == "Новое описание"
        assert updated.city == "Казань"

    def test_update_user_not_existing(self, db_session):
        crud = UserCRUD(db_session)

        assert crud.update_user(999999, UserUpdate(city="Тверь")) is None

    def test_touch_last_active(self, db_session, make_user):
        old = datetime(2020, 1, 1)
        user = make_user(last_active=old)
        crud = UserCRUD(db_session)

        assert crud.touch_last_active(user.id) is True

        db_session.refresh(user)
        assert user.last_active > old

    def test_touch_last_active_missing_user(self, db_session):
        assert UserCRUD(db_session).touch_last_active(999999) is False


class TestUserListing:
    """Тесты фильтрации, сортировки и пагинации списка пользователей"""

    def test_excludes_requesting_user(self, db_session, make_user):
        me = make_user()
        others = [make_user() for _ in range(3)]

        result = UserCRUD(db_session).get_users(UserParams(user_id=me.id))

        ids = [u.id for u in result.items]
        assert me.id not in ids
        assert sorted(ids) == sorted(u.id for u in others)
        assert result.total_count == 3

    @pytest.mark.parametrize("kwargs", [
        {"gender": "male"},
        {"gender": "female", "order_by": "created"},
        {"likers": True},
        {"likees": True},
        {"min_age": 18, "max_age": 40},
    ])
    def test_requesting_user_never_listed(self, db_session, make_user, make_like, kwargs):
        me = make_user(gender="female")
        other = make_user(gender="male")
        make_like(me, other)
        make_like(other, me)

        result = UserCRUD(db_session).get_users(UserParams(user_id=me.id, **kwargs))

        assert me.id not in [u.id for u in result.items]

    def test_gender_filter(self, db_session, make_user):
        me = make_user(gender="male")
        woman = make_user(gender="female")
        make_user(gender="male")

        result = UserCRUD(db_session).get_users(UserParams(user_id=me.id, gender="female"))

        assert [u.id for u in result.items] == [woman.id]

    def test_likers_filter(self, db_session, make_user, make_like):
        """Только те, кто лайкнул меня"""
        me = make_user()
        fan = make_user()
        crush = make_user()
        make_user()
        make_like(fan, me)
        make_like(me, crush)

        result = UserCRUD(db_session).get_users(UserParams(user_id=me.id, likers=True))

        assert [u.id for u in result.items] == [fan.id]

    def test_likees_filter_uses_likees_direction(self, db_session, make_user, make_like):
        """Только те, кого лайкнул я (а не те, кто лайкнул меня)"""
        me = make_user()
        fan = make_user()
        crush = make_user()
        make_like(fan, me)
        make_like(me, crush)

        result = UserCRUD(db_session).get_users(UserParams(user_id=me.id, likees=True))

        assert [u.id for u in result.items] == [crush.id]

    def test_likers_filter_without_likes_is_empty(self, db_session, make_user):
        me = make_user()
        make_user()

        result = UserCRUD(db_session).get_users(UserParams(user_id=me.id, likers=True))

        assert result.items == []
        assert result.total_count == 0

    def test_age_filter_boundaries_inclusive(self, db_session, make_user):
        """Границы диапазона дат рождения включаются, день за границей - нет"""
        me = make_user()
        max_dob = TimezoneUtils.years_ago(20)
        min_dob = TimezoneUtils.years_ago(31)

        at_max = make_user(date_of_birth=max_dob)
        after_max = make_user(date_of_birth=max_dob + timedelta(days=1))
        at_min = make_user(date_of_birth=min_dob)
        before_min = make_user(date_of_birth=min_dob - timedelta(days=1))

        result = UserCRUD(db_session).get_users(
            UserParams(user_id=me.id, min_age=20, max_age=30)
        )

        ids = {u.id for u in result.items}
        assert at_max.id in ids
        assert at_min.id in ids
        assert after_max.id not in ids
        assert before_min.id not in ids

    def test_default_age_bounds_do_not_filter(self, db_session, make_user):
        me = make_user()
        very_old = make_user(age=120)

        result = UserCRUD(db_session).get_users(UserParams(user_id=me.id))

        assert very_old.id in [u.id for u in result.items]

    def test_default_order_is_last_active_desc(self, db_session, make_user):
        me = make_user()
        base = datetime(2024, 5, 1, 12, 0)
        idle = make_user(last_active=base, created=base + timedelta(days=2))
        active = make_user(last_active=base + timedelta(hours=5), created=base)

        result = UserCRUD(db_session).get_users(UserParams(user_id=me.id))

        assert [u.id for u in result.items][:2] == [active.id, idle.id]

    def test_order_by_created_desc(self, db_session, make_user):
        me = make_user(last_active=datetime(2000, 1, 1))
        base = datetime(2024, 5, 1, 12, 0)
        newcomer = make_user(created=base + timedelta(days=2), last_active=base)
        veteran = make_user(created=base, last_active=base + timedelta(days=5))

        result = UserCRUD(db_session).get_users(UserParams(user_id=me.id, order_by="created"))

        assert [u.id for u in result.items] == [newcomer.id, veteran.id]

    def test_pagination_third_page(self, db_session, make_user):
        """25 кандидатов, страница 3 по 10 - 5 записей"""
        me = make_user()
        for _ in range(25):
            make_user()

        result = UserCRUD(db_session).get_users(
            UserParams(user_id=me.id, page_number=3, page_size=10)
        )

        assert len(result.items) == 5
        assert result.total_count == 25
        assert result.total_pages == 3
        assert result.current_page == 3

    def test_page_beyond_last_is_empty(self, db_session, make_user):
        me = make_user()
        for _ in range(4):
            make_user()

        result = UserCRUD(db_session).get_users(
            UserParams(user_id=me.id, page_number=5, page_size=2)
        )

        assert result.items == []
        assert result.total_count == 4
        assert result.total_pages == 2
