from datetime import timedelta

from django.contrib.auth import get_user_model
from django.test import override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APIRequestFactory, APITestCase

from bookings import services
from bookings.api.serializers import BookingCreateSerializer
from bookings.models import Booking
from notifications.models import Notification

User = get_user_model()


def tomorrow_at(hour):
    day = timezone.now() + timedelta(days=1)
    return day.replace(hour=hour, minute=0, second=0, microsecond=0)


def create_booking(user, people=2, hour=19, status=Booking.Status.PENDING):
    return Booking.objects.create(user=user, number_of_people=people, booked_at=tomorrow_at(hour), status=status)


class BookingTestMixin:
    def setUp(self):
        self.guest = User.objects.create_user("guest", "guest@example.com", "Pass123!x")
        self.guest_token = Token.objects.create(user=self.guest)
        self.other = User.objects.create_user("other", "other@example.com", "Pass123!x")
        self.other_token = Token.objects.create(user=self.other)
        self.admin = User.objects.create_user("admin", "admin@example.com", "Pass123!x", is_staff=True)
        self.admin_token = Token.objects.create(user=self.admin)

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")


class BookingCreateTests(BookingTestMixin, APITestCase):
    def setUp(self):
        super().setUp()
        self.url = reverse("booking-list")

    def test_guest_books_a_table(self):
        self.auth(self.guest_token)
        res = self.client.post(self.url, {"booked_at": tomorrow_at(20).isoformat(), "number_of_people": 4}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["status"], "PENDING")
        self.assertEqual(res.data["user_id"], self.guest.id)
        self.assertEqual(res.data["number_of_people"], 4)

    def test_party_size_defaults_to_one(self):
        self.auth(self.guest_token)
        res = self.client.post(self.url, {"booked_at": tomorrow_at(20).isoformat()}, format="json")
        self.assertEqual(res.data["number_of_people"], 1)

    def test_create_broadcasts_new_reservation(self):
        self.auth(self.guest_token)
        self.client.post(self.url, {"booked_at": tomorrow_at(20).isoformat()}, format="json")
        notification = Notification.objects.get()
        self.assertEqual(notification.type, Notification.Type.NEW_RESERVATION)
        self.assertIsNone(notification.user_id)

    def test_party_size_out_of_range_400(self):
        self.auth(self.guest_token)
        for people in (0, 101):
            res = self.client.post(
                self.url, {"booked_at": tomorrow_at(20).isoformat(), "number_of_people": people}, format="json"
            )
            self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertIn("number_of_people", res.data)

    def test_missing_booked_at_400(self):
        self.auth(self.guest_token)
        res = self.client.post(self.url, {"number_of_people": 2}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("booked_at", res.data)

    def test_guest_cannot_book_for_someone_else(self):
        self.auth(self.guest_token)
        res = self.client.post(
            self.url, {"booked_at": tomorrow_at(20).isoformat(), "user_id": self.other.id}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Booking.objects.exists())

    def test_staff_books_for_a_guest(self):
        self.auth(self.admin_token)
        res = self.client.post(
            self.url, {"booked_at": tomorrow_at(20).isoformat(), "user_id": self.other.id}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["user_id"], self.other.id)

    def test_unauthenticated_401(self):
        res = self.client.post(self.url, {"booked_at": tomorrow_at(20).isoformat()}, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)


class BookingCreateSerializerTests(BookingTestMixin, APITestCase):
    def build(self, user_id, context):
        data = {"user_id": user_id, "booked_at": tomorrow_at(20).isoformat()}
        return BookingCreateSerializer(data=data, context=context)

    def test_without_request_user_id_is_rejected(self):
        serializer = self.build(self.guest.id, {})
        self.assertFalse(serializer.is_valid())
        self.assertIn("user_id", serializer.errors)

    def test_staff_request_may_name_any_user(self):
        request = APIRequestFactory().post(reverse("booking-list"))
        request.user = self.admin
        serializer = self.build(self.other.id, {"request": request})
        self.assertTrue(serializer.is_valid(), serializer.errors)


class BookingListTests(BookingTestMixin, APITestCase):
    def setUp(self):
        super().setUp()
        self.early = create_booking(self.guest, people=2, hour=12)
        self.late = create_booking(self.guest, people=6, hour=21, status=Booking.Status.CONFIRMED)
        self.foreign = create_booking(self.other, people=3, hour=18)
        self.url = reverse("booking-list")

    def ids(self, res):
        return [r["id"] for r in res.data["results"]]

    def test_guest_sees_own_bookings_latest_first(self):
        self.auth(self.guest_token)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(self.ids(res), [str(self.late.id), str(self.early.id)])

    def test_staff_sees_all(self):
        self.auth(self.admin_token)
        res = self.client.get(self.url)
        self.assertEqual(res.data["count"], 3)

    def test_filters(self):
        self.auth(self.admin_token)
        self.assertEqual(self.ids(self.client.get(self.url, {"status": "confirmed"})), [str(self.late.id)])
        self.assertEqual(self.ids(self.client.get(self.url, {"user_id": self.other.id})), [str(self.foreign.id)])
        self.assertEqual(self.ids(self.client.get(self.url, {"number_of_people": 2})), [str(self.early.id)])

    def test_ordering(self):
        self.auth(self.admin_token)
        res = self.client.get(self.url, {"ordering": "number_of_people"})
        self.assertEqual([r["number_of_people"] for r in res.data["results"]], [2, 3, 6])

    def test_bad_params_400(self):
        self.auth(self.admin_token)
        for params in ({"status": "LATE"}, {"user_id": "x"}, {"ordering": "user"}):
            res = self.client.get(self.url, params)
            self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_ascii_digits_400(self):
        self.auth(self.admin_token)
        for params in ({"user_id": "\u00b2"}, {"number_of_people": "\u00b3"}):
            res = self.client.get(self.url, params)
            self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertIn(next(iter(params)), res.data)


class BookingDetailTests(BookingTestMixin, APITestCase):
    def setUp(self):
        super().setUp()
        self.booking = create_booking(self.guest)
        self.url = reverse("booking-detail", args=[self.booking.id])

    def confirmations(self):
        return Notification.objects.filter(user=self.guest, type=Notification.Type.RESERVATION_CONFIRMED)

    def test_owner_reads_booking(self):
        self.auth(self.guest_token)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["id"], str(self.booking.id))

    def test_other_guest_403(self):
        self.auth(self.other_token)
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.client.delete(self.url).status_code, status.HTTP_403_FORBIDDEN)

    def test_guest_moves_and_resizes_booking(self):
        self.auth(self.guest_token)
        new_time = tomorrow_at(21)
        res = self.client.patch(self.url, {"booked_at": new_time.isoformat(), "number_of_people": 5}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.number_of_people, 5)
        self.assertEqual(self.booking.booked_at, new_time)

    def test_guest_cancels_booking(self):
        self.auth(self.guest_token)
        res = self.client.patch(self.url, {"status": "CANCELLED_BY_CUSTOMER"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "CANCELLED_BY_CUSTOMER")

    def test_guest_cannot_confirm_403(self):
        self.auth(self.guest_token)
        res = self.client.patch(self.url, {"status": "CONFIRMED"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.Status.PENDING)

    def test_staff_confirm_notifies_guest_once(self):
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {"status": "confirmed"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "CONFIRMED")
        self.client.patch(self.url, {"status": "CONFIRMED"}, format="json")
        self.client.patch(self.url, {"number_of_people": 3}, format="json")
        self.assertEqual(self.confirmations().count(), 1)

    def test_invalid_transition_409(self):
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {"status": "COMPLETED"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(res.data["code"], "invalid_transition")

    def test_empty_patch_400(self):
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_owner_soft_deletes_booking(self):
        self.auth(self.guest_token)
        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Booking.objects.filter(id=self.booking.id).exists())
        self.assertTrue(Booking.all_objects.filter(id=self.booking.id).exists())
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_404_NOT_FOUND)


class BookingTransitionTests(BookingTestMixin, APITestCase):
    def test_full_visit(self):
        booking = create_booking(self.guest)
        for step in (Booking.Status.CONFIRMED, Booking.Status.SEATED, Booking.Status.COMPLETED):
            booking = services.update_booking(booking.id, {"status": step})
        self.assertEqual(booking.status, Booking.Status.COMPLETED)

    def test_terminal_states_reject_changes(self):
        booking = create_booking(self.guest, status=Booking.Status.NO_SHOW)
        with self.assertRaises(services.InvalidTransition):
            services.update_booking(booking.id, {"status": Booking.Status.SEATED})

    @override_settings(BOOKING_STATUS_TRANSITIONS={"PENDING": ["SEATED"]})
    def test_table_can_be_overridden(self):
        booking = create_booking(self.guest)
        booking = services.update_booking(booking.id, {"status": Booking.Status.SEATED})
        self.assertEqual(booking.status, Booking.Status.SEATED)
        with self.assertRaises(services.InvalidTransition):
            services.check_transition(Booking.Status.PENDING, Booking.Status.CONFIRMED)
