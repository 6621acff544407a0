"""
Tests for mapping the event detail payload on the client
"""
import pytest

from eventfinder.client.detail import (
    find_seatmap_url,
    genres_label,
    map_event_detail,
    ticket_status_label,
    venue_address_line,
)


class TestTicketStatus:
    @pytest.mark.parametrize(
        "code,label",
        [
            ("onsale", "On Sale"),
            ("offsale", "Off Sale"),
            ("OnSale", "On Sale"),
            ("canceled", "Canceled"),
            ("postponed", "Postponed"),
            ("rescheduled", "Rescheduled"),
            ("foo", "foo"),
            (None, "N/A"),
            ("", "N/A"),
        ],
    )
    def test_labels(self, code, label):
        assert ticket_status_label(code) == label


class TestSeatmap:
    def test_static_url(self, sample_tm_event):
        assert find_seatmap_url(sample_tm_event) == "https://maps.example.com/seatmap.png"

    def test_venue_image_fallback(self):
        event = {
            "_embedded": {
                "venues": [
                    {
                        "images": [
                            {"url": "https://img.example.com/front.jpg"},
                            {"url": "https://img.example.com/SeatingChart.png"},
                        ]
                    }
                ]
            }
        }
        assert find_seatmap_url(event) == "https://img.example.com/SeatingChart.png"

    def test_none(self):
        assert find_seatmap_url({"_embedded": {"venues": [{"images": [{"url": "a.jpg"}]}]}}) == ""


class TestGenres:
    def test_undefined_sub_genre_is_dropped(self):
        event = {
            "classifications": [
                {"segment": {"name": "Music"}, "genre": {"name": "Rock"}, "subGenre": {"name": "Undefined"}}
            ]
        }
        assert genres_label(event) == "Music, Rock"

    def test_all_parts(self, sample_tm_event):
        assert genres_label(sample_tm_event) == "Music, Rock, Indie Rock"

    def test_no_classifications(self):
        assert genres_label({}) == "N/A"


class TestMapEventDetail:
    def test_full_event(self, sample_tm_event):
        detail = map_event_detail(sample_tm_event)

        assert detail.id == "vvG1zZ9aBcDeF"
        assert detail.artist_team == "Phoebe Bridgers, Muna"
        assert detail.attraction_names == ["Phoebe Bridgers", "Muna"]
        assert detail.venue == "Hollywood Bowl"
        assert detail.category == "Music"
        assert detail.ticket_status == "On Sale"
        assert detail.buy_ticket_url == "https://www.ticketmaster.com/event/vvG1zZ9aBcDeF"
        assert detail.image_url == "https://img.example.com/large.jpg"
        assert detail.venue_parking == "Stacked parking available."
        assert detail.venue_general_rule == "No outside alcohol."
        assert detail.venue_child_rule == "Children 2 and over need a ticket."
        assert detail.venue_address_line == "2301 N Highland Ave, Los Angeles, CA"
        assert detail.google_maps_url.startswith("https://www.google.com/maps/search/?api=1&query=2301%20N%20Highland")
        assert detail.venue_see_events_url == "https://www.ticketmaster.com/venue/hollywood-bowl"

    def test_string_general_info(self):
        event = {"_embedded": {"venues": [{"name": "Hall", "generalInfo": "Be nice.", "childRule": "No kids."}]}}

        detail = map_event_detail(event)

        assert detail.venue_general_rule == "Be nice."
        assert detail.venue_child_rule == "No kids."

    def test_empty_payload(self):
        detail = map_event_detail({})

        assert detail.name == "N/A"
        assert detail.artist_team == "N/A"
        assert detail.ticket_status == "N/A"
        assert detail.google_maps_url is None
        assert detail.seatmap_url == ""

    def test_venue_address_uses_state_name_without_code(self):
        venue = {"address": {"line1": "1 Main St"}, "city": {"name": "Springfield"}, "state": {"name": "Illinois"}}
        assert venue_address_line(venue) == "1 Main St, Springfield, Illinois"

    def test_to_event_item(self, sample_tm_event):
        item = map_event_detail(sample_tm_event).to_event_item()

        assert item.id == "vvG1zZ9aBcDeF"
        assert item.name == "Phoebe Bridgers"
        assert item.venue == "Hollywood Bowl"
        assert item.image_url == "https://img.example.com/large.jpg"
